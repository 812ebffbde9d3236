"""multipart/form-data body construction.

Each field is framed as::

    --{boundary}\\r\\n
    Content-Disposition: form-data; name="{name}"[; filename="{file}"]\\r\\n
    [Content-Type: {mime}\\r\\n]
    \\r\\n
    {value}\\r\\n

and the body ends with ``--{boundary}--`` (no trailing CRLF).
"""

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from io import BytesIO
from typing import assert_never

from ether.constants import CONTENT_TYPE_MULTIPART_FORM, CRLF, MULTIPART_BOUNDARY_PREFIX
from ether.models import FileField, FormValue, TextField


@dataclass(frozen=True)
class MultipartBody:
    """An encoded multipart body and the boundary that frames it."""

    boundary: str
    content: bytes

    @property
    def content_type(self) -> str:
        """Content-Type header value announcing the boundary."""
        return f"{CONTENT_TYPE_MULTIPART_FORM}; boundary={self.boundary}"


def new_boundary() -> str:
    """Generate a random boundary token."""
    return f"{MULTIPART_BOUNDARY_PREFIX}{str(uuid.uuid4()).upper()}"


def build_multipart_body(
    form_items: Mapping[str, FormValue],
    boundary: str | None = None,
) -> MultipartBody:
    """Serialize form fields into a multipart/form-data body.

    Fields are written in mapping iteration order.

    Args:
        form_items: Field name to form value.
        boundary: Boundary token; a random one is generated when omitted.

    Returns:
        MultipartBody with the boundary and encoded bytes.
    """
    boundary = boundary or new_boundary()
    buffer = BytesIO()

    for name, value in form_items.items():
        buffer.write(f"--{boundary}{CRLF}".encode())
        if isinstance(value, TextField):
            buffer.write(f'Content-Disposition: form-data; name="{name}"{CRLF}{CRLF}'.encode())
            buffer.write(value.text.encode("utf-8"))
        elif isinstance(value, FileField):
            buffer.write(
                f'Content-Disposition: form-data; name="{name}"; '
                f'filename="{value.file_name}"{CRLF}'.encode()
            )
            buffer.write(f"Content-Type: {value.mime_type}{CRLF}{CRLF}".encode())
            buffer.write(value.file_data)
        else:
            assert_never(value)
        buffer.write(CRLF.encode())

    buffer.write(f"--{boundary}--".encode())
    return MultipartBody(boundary=boundary, content=buffer.getvalue())
