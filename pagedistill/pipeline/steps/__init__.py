"""Pipeline steps for per-file conversion."""

from .convert import ConvertStep
from .extract import ExtractStep
from .postprocess import PostProcessStep
from .read import ReadStep
from .save import SaveStep

__all__ = [
    "ConvertStep",
    "ExtractStep",
    "PostProcessStep",
    "ReadStep",
    "SaveStep",
]
