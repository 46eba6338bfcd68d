# config.py
import os

# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_TITLE = "Autobiography"
DEFAULT_FILENAME = "autobiography"
LOG_LEVEL = os.environ.get("BIOGRAPHY_LOG_LEVEL", "INFO")

# ============================================================================
# OPENAI CONFIGURATION
# ============================================================================

OPENAI_CONFIG = {
    "api_key": os.environ.get("OPENAI_API_KEY", ""),
    "model": os.environ.get("BIOGRAPHY_MODEL", "gpt-4o-mini"),
    "timeout": float(os.environ.get("BIOGRAPHY_GENERATION_TIMEOUT", 120)),
    "max_tokens": int(os.environ.get("BIOGRAPHY_MAX_TOKENS", 4000)),
    "temperature": 0.7
}

# ============================================================================
# STORAGE CONFIGURATION
# ============================================================================

STORAGE_CONFIG = {
    "base_path": os.environ.get("BIOGRAPHY_DATA_DIR", "biographies"),
    "public_index": "public_ids.json"
}

# ============================================================================
# EXPORT CONFIGURATION
# ============================================================================

EXPORT_CONFIG = {
    "page_format": "Letter",
    "margin_mm": 18,
    "cover_max_width": 1600,
    "cover_jpeg_quality": 85,
    "paragraph_spacing_pt": 10
}

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
}
