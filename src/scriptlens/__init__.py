"""scriptlens — re-indent minified scripts and flag secret-like strings."""

from .lexer import tokenize
from .reconstruct import reconstruct
from .postprocess import cleanup
from .beautifier import Beautifier, BeautifyConfig, beautify
from .patterns import ScannerConfig, resolve_overlaps, scan
from .annotator import Annotator, AnnotatorConfig, escape_markup, scan_and_annotate
from .pipeline import Pipeline
from .config import ConfigError, create_pipeline, load_config, load_from_yaml
from .types import AnnotatedText, Finding, Token

__all__ = [
    "tokenize", "reconstruct", "cleanup",
    "Beautifier", "BeautifyConfig", "beautify",
    "ScannerConfig", "resolve_overlaps", "scan",
    "Annotator", "AnnotatorConfig", "escape_markup", "scan_and_annotate",
    "Pipeline",
    "ConfigError", "create_pipeline", "load_config", "load_from_yaml",
    "AnnotatedText", "Finding", "Token",
]
__version__ = "0.1.0"
