"""
Upload handler enforcing the maximum request body size
"""

from django.core.files.uploadhandler import FileUploadHandler

from core.exceptions import PayloadTooLargeError


class MaxBytesUploadHandler(FileUploadHandler):
    """
    Reject a multipart body that is, or turns out to be, larger than
    ``max_bytes``.

    Installed ahead of Django's default handlers. The declared length is
    checked before parsing starts and the bytes actually received are
    counted as they stream in, so a missing or understated Content-Length
    cannot get past the limit.
    """

    def __init__(self, request=None, max_bytes=None):
        super().__init__(request)
        self.max_bytes = max_bytes
        self.received = 0

    def handle_raw_input(self, input_data, META, content_length, boundary, encoding=None):
        if self.max_bytes is not None and content_length > self.max_bytes:
            raise PayloadTooLargeError()
        return None

    def receive_data_chunk(self, raw_data, start):
        self.received += len(raw_data)
        if self.max_bytes is not None and self.received > self.max_bytes:
            raise PayloadTooLargeError()
        return raw_data

    def file_complete(self, file_size):
        return None
