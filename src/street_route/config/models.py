import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    timeout_s: float = Field(default=10.0, ge=0, allow_inf_nan=False)
    heuristic: Literal["great_circle", "zero"] = "great_circle"


# ----------------- GRAPH SOURCES ---------------------


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["json", "pickle"] = "json"
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class GraphSynthetic(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["synthetic"] = "synthetic"
    rows: int = Field(default=20, ge=1)
    cols: int = Field(default=20, ge=1)
    spacing_deg: float = Field(default=0.001, gt=0)
    origin_lon: float = -122.27
    origin_lat: float = 37.87
    jitter: float = 0.2
    drop_fraction: float = 0.0
    seed: int = 123

    @field_validator("jitter", "drop_fraction")
    @classmethod
    def _unit(cls, v: float, info: ValidationInfo) -> float:
        if not 0.0 <= v < 1.0:
            raise ValueError(f"{info.field_name} must be in [0, 1)")
        return v


GraphRef = Annotated[GraphByPath | GraphSynthetic, Field(discriminator="by")]


# ------------------------------------------------------------------


class RoutingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    graph: GraphRef
    search: SearchModel = SearchModel()
    log: LogModel = LogModel()
