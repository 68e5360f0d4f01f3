import os

from django.conf import settings


def validate_file(file):
    """
    Check an uploaded file against the allow-list and size cap.

    Returns:
        tuple: (is_valid: bool, error: str or None)
    """
    if file is None:
        return False, "No file provided."

    ext = os.path.splitext(file.name or '')[1].lower()
    if ext not in settings.DOCUMENT_ALLOWED_EXTENSIONS:
        return False, "Invalid file type. Please upload a PDF, JPG, or PNG file"

    content_type = getattr(file, 'content_type', None)
    if content_type and content_type != 'application/octet-stream':
        if content_type.lower() not in settings.DOCUMENT_ALLOWED_CONTENT_TYPES:
            return False, "Invalid file type. Please upload a PDF, JPG, or PNG file"

    if file.size > settings.DOCUMENT_MAX_UPLOAD_SIZE:
        return False, "File too large. Maximum file size is 10MB"

    return True, None
