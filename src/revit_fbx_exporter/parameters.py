# File: src/revit_fbx_exporter/parameters.py
"""
Parameter file schema and loader.

The Design Automation work item uploads a small ``params.json`` next to the
model. It is validated against a pydantic schema that keeps track of which
fields were actually present, so an absent ``exportAll`` can be told apart
from an explicit ``false``.

Example params.json:
    {"exportAll": false, "viewIds": ["a8e3...-0004d1f2", 123456]}

Usage:
    from revit_fbx_exporter.parameters import load_parameters

    config = load_parameters("params.json", outcome)
    if config is None:
        return outcome   # CONFIGURATION failure already recorded
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

from revit_fbx_exporter.errors import ErrorKind, ExportOutcome, RunState
from revit_fbx_exporter.utils.logging_config import get_logger

logger = get_logger(__name__)


class ParameterError(ValueError):
    """Raised when a parameter document cannot be turned into a configuration."""


class ExportParameters(BaseModel):
    """Schema of the ``params.json`` document."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    export_all: Optional[StrictBool] = Field(
        default=None,
        alias="exportAll",
        description="Export every non-template 3D view in the document",
    )
    view_ids: Optional[List[Union[str, int]]] = Field(
        default=None,
        alias="viewIds",
        description="Element ids or unique ids of the views to export",
    )
    stop_on_first_error: StrictBool = Field(
        default=True,
        alias="stopOnFirstError",
        description="Abort the batch on the first failing view",
    )

    @field_validator("view_ids", mode="before")
    @classmethod
    def reject_non_list(cls, v: Any) -> Any:
        """Disallow a bare string or booleans masquerading as ids."""
        if v is not None and not isinstance(v, list):
            raise ValueError("viewIds must be a list")
        if v is not None and any(isinstance(item, bool) for item in v):
            raise ValueError("viewIds entries must be strings or integers")
        return v

    @field_validator("view_ids")
    @classmethod
    def normalize_ids(cls, v: Optional[List[Union[str, int]]]) -> Optional[List[str]]:
        if v is None:
            return None
        normalized = []
        for item in v:
            text = str(item).strip()
            if not text:
                raise ValueError("viewIds entries must not be blank")
            normalized.append(text)
        return normalized

    def has_field(self, name: str) -> bool:
        """True when the field was present in the document with a non-null value."""
        return name in self.model_fields_set and getattr(self, name) is not None

    def to_configuration(self) -> "ExportConfiguration":
        """Resolve defaults into a concrete ExportConfiguration.

        An absent ``exportAll`` means "export everything" only when no
        ``viewIds`` were given either.
        """
        if self.has_field("export_all"):
            export_all = self.export_all
        else:
            export_all = not self.has_field("view_ids")

        return ExportConfiguration(
            export_all=export_all,
            view_ids=list(self.view_ids or []),
            stop_on_first_error=self.stop_on_first_error,
        )


@dataclass
class ExportConfiguration:
    """Resolved, immutable-by-convention export settings for one run."""
    export_all: bool
    view_ids: List[str] = field(default_factory=list)
    stop_on_first_error: bool = True


def parse_parameters(text: Union[str, bytes]) -> ExportConfiguration:
    """Parse a parameter document.

    Args:
        text: JSON text of the parameter file, or its raw UTF-8 bytes
            (a leading BOM is tolerated)

    Returns:
        ExportConfiguration

    Raises:
        ParameterError: If the bytes are not UTF-8, the JSON is malformed,
            null, not an object, or violates the schema
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParameterError(f"Parameter file is not valid UTF-8: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParameterError(f"Invalid JSON: {e}") from e

    if data is None:
        raise ParameterError("Parameter document is null")
    if not isinstance(data, dict):
        raise ParameterError(
            f"Parameter document must be a JSON object, got {type(data).__name__}"
        )

    try:
        params = ExportParameters.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise ParameterError(f"Invalid parameters: {problems}") from e

    return params.to_configuration()


def load_parameters(path: str, outcome: ExportOutcome) -> Optional[ExportConfiguration]:
    """Read and validate the parameter file.

    Args:
        path: Path to the parameter file
        outcome: Run outcome to record progress and failures on

    Returns:
        ExportConfiguration, or None after recording a CONFIGURATION failure
    """
    if not os.path.isfile(path):
        outcome.fail(ErrorKind.CONFIGURATION, f"Parameter file not found: {path}")
        return None

    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        outcome.fail(ErrorKind.CONFIGURATION, f"Could not read parameter file {path}", e)
        return None

    try:
        config = parse_parameters(raw)
    except ParameterError as e:
        outcome.fail(ErrorKind.CONFIGURATION, f"Could not load parameters from {path}", e)
        return None

    if config.export_all:
        outcome.trace("Parameters loaded: exporting all 3D views")
    else:
        outcome.trace(f"Parameters loaded: {len(config.view_ids)} view id(s) requested")
    if not config.stop_on_first_error:
        outcome.trace("Best-effort mode: failing views will not stop the batch")

    outcome.advance(RunState.PARAMS_LOADED)
    return config
