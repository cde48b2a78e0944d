"""PDF-to-podcast pipeline package.

Modules are organised by the order in which ``POST /api/upload`` executes:

1. ``ingestion`` – validate presence, MIME type and size of the upload.
2. ``staging`` – write the bytes to a unique scratch file.
3. ``scripting`` / ``prompts`` – turn OCR text into a structured script.
4. ``synthesis`` – narrate each section and map section ids to clips.
5. ``flow`` – the state machine that ties the stages together.

The OCR, language-model, TTS and GridDB clients live in ``pdfcast.services``.
"""

from .flow import PipelineConfig, PipelineStage, PodcastPipeline, SUPPORTED_VOICES
from .ingestion import (
    FileTooLargeError,
    InvalidFileTypeError,
    MissingFileError,
    UploadValidationError,
    validate_upload,
)
from .scripting import PodcastScriptGenerator, parse_script
from .synthesis import AudioSynthesizer, SynthesisOptions, to_public_map, to_public_path
from .types import IncomingUpload, PipelineFailure, PipelineRun, PipelineState

__all__ = [
    "AudioSynthesizer",
    "FileTooLargeError",
    "IncomingUpload",
    "InvalidFileTypeError",
    "MissingFileError",
    "PipelineConfig",
    "PipelineFailure",
    "PipelineRun",
    "PipelineStage",
    "PipelineState",
    "PodcastPipeline",
    "PodcastScriptGenerator",
    "SUPPORTED_VOICES",
    "SynthesisOptions",
    "UploadValidationError",
    "parse_script",
    "to_public_map",
    "to_public_path",
    "validate_upload",
]
