MIME_TYPE_MAPPING = {
    "application/rtf": "rtf",
    "text/rtf": "rtf",
    "application/x-rtf": "rtf",
}

# extensions accepted when the platform's mimetypes table does not know them
EXTENSION_MAPPING = {
    ".rtf": "rtf",
}


def is_supported_mime_type(mime_type: str | None) -> bool:
    if not mime_type:
        return False
    return mime_type.lower() in MIME_TYPE_MAPPING
