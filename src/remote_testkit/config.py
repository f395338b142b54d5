from pydantic import BaseModel, Field, field_validator
from typing import Literal, Optional, Tuple
import yaml, pathlib

ReportType = Literal["text", "text-summary", "json"]

class Watermarks(BaseModel):
    statements: Tuple[float, float] = Field((50, 80), description="low/high thresholds in percent")
    branches: Tuple[float, float] = Field((50, 80))
    functions: Tuple[float, float] = Field((50, 80))
    lines: Tuple[float, float] = Field((50, 80))

    @field_validator("statements", "branches", "functions", "lines")
    @classmethod
    def _ordered(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        if v[0] > v[1]:
            raise ValueError(f"low watermark {v[0]} is above high watermark {v[1]}")
        return v

class ReporterConfig(BaseModel):
    hide_passed: bool = Field(False, description="Do not print a line for each passing test")
    hide_skipped: bool = Field(False, description="Do not print a line for each skipped test")
    report_type: ReportType = Field("text", description="Coverage report flavour")
    filename: Optional[str] = Field(None, description="Output file for file-based coverage reports")
    watermarks: Watermarks = Field(default_factory=Watermarks)

class AppConfig(BaseModel):
    reporter: ReporterConfig = Field(default_factory=ReporterConfig)
    serve_only: bool = Field(False, description="No test sessions are expected; silences orphaned-session diagnostics")
    log_level: str = Field("INFO")
    junit: Optional[str] = Field(None, description="Write JUnit XML to this path")

def load_config(path: Optional[str] = None) -> AppConfig:
    if path is None:
        return AppConfig()
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return AppConfig.model_validate(data)
