"""Pydantic configuration models for pagedistill."""

from enum import Enum
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ConverterBackend(str, Enum):
    """Available HTML to Markdown converter backends."""

    PANDOC = "pandoc"
    HTML2TEXT = "html2text"


class ConverterConfig(BaseModel):
    """Configuration for the external document converter."""

    backend: ConverterBackend = Field(
        ConverterBackend.PANDOC,
        description="Converter backend (pandoc subprocess or in-process html2text)",
    )
    pandoc_path: str = Field("pandoc", description="Name or path of the pandoc executable")
    source_format: str = Field("html", description="Source format passed to pandoc -f")
    target_format: str = Field("markdown", description="Target format passed to pandoc -t")
    timeout: Optional[float] = Field(
        120.0,
        gt=0,
        description="Seconds to wait for one conversion (None = wait forever)",
    )
    extra_args: list[str] = Field(
        default_factory=list,
        description="Additional arguments appended to the pandoc command line",
    )

    model_config = {"extra": "forbid"}


class PagedistillConfig(BaseModel):
    """
    Root configuration model for pagedistill.

    Example:
        config = PagedistillConfig(
            input_dir=Path("./legacy-site"),
            output_dir=Path("./content/posts"),
            category="Travel",
            tag="Tokyo",
        )

    YAML format:
        input_dir: ./legacy-site
        output_dir: ./content/posts
        category: Travel
        tag: Tokyo
        converter:
          backend: pandoc
          timeout: 60
    """

    input_dir: Path = Field(..., description="Root directory searched for .html files")
    output_dir: Path = Field(..., description="Directory receiving <basename>.md files")
    category: str = Field(..., description="Category echoed into every front matter block")
    tag: str = Field(..., description="Tag echoed into every front matter block")

    converter: ConverterConfig = Field(default_factory=ConverterConfig)

    cleanup: bool = Field(
        True,
        description="Delete *processed* intermediate files under input_dir after the run",
    )
    dry_run: bool = Field(False, description="List what would be converted without writing files")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str, **overrides: Any) -> "PagedistillConfig":
        """
        Load config from a YAML string.

        Keyword overrides replace top-level keys from the document, which is
        how command-line positionals win over file values.
        """
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the top level")
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path, **overrides: Any) -> "PagedistillConfig":
        """Load config from YAML file."""
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return cls.from_yaml(path.read_text(encoding="utf-8"), **overrides)
