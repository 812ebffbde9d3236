"""In-process echo server for integration tests.

Served through ``httpx.ASGITransport`` so no sockets are opened.
"""

import gzip

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import UploadFile

from tests.helpers.models import A_SOMEWHAT_COMPLICATED_INSTANCE, SomewhatComplicatedStruct


# Bytes served by /getImage (PNG signature followed by filler)
IMAGE_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256))

DEFAULT_MARCO = "polo"

app = FastAPI()


async def _read_body(request: Request) -> bytes:
    """Read the request body, inflating it when sent gzip-encoded."""
    body = await request.body()
    if request.headers.get("content-encoding") == "gzip":
        return gzip.decompress(body)
    return body


@app.get("/echo")
async def echo(request: Request) -> dict[str, str]:
    return {"marco": request.query_params.get("marco", DEFAULT_MARCO)}


@app.get("/echo/{count}")
async def echo_many(count: int, request: Request) -> list[dict[str, str]]:
    marco = request.query_params.get("marco", DEFAULT_MARCO)
    return [{"marco": marco} for _ in range(count)]


@app.get("/echoWeird")
async def echo_weird(request: Request) -> dict[str, dict[str, str]]:
    return {"some_weird_key": {"marco": request.query_params.get("marco", DEFAULT_MARCO)}}


@app.get("/echoWeird/{count}")
async def echo_weird_many(count: int, request: Request) -> dict[str, list[dict[str, str]]]:
    marco = request.query_params.get("marco", DEFAULT_MARCO)
    return {"some_weird_key": [{"marco": marco} for _ in range(count)]}


@app.post("/postComplicatedStruct")
async def post_complicated_struct(request: Request) -> Response:
    """Echo the struct back, or 417 if it differs from the expected instance."""
    body = await _read_body(request)
    received = SomewhatComplicatedStruct.model_validate_json(body)
    if received != A_SOMEWHAT_COMPLICATED_INSTANCE:
        return Response(status_code=417)
    return JSONResponse(received.model_dump(by_alias=True))


@app.post("/postMultipartForm")
async def post_multipart_form(request: Request) -> dict[str, dict[str, object]]:
    """Report every text and file part the form parser found."""
    texts: dict[str, object] = {}
    files: dict[str, object] = {}
    async with request.form() as form:
        for name, value in form.multi_items():
            if isinstance(value, UploadFile):
                data = await value.read()
                files[name] = {
                    "filename": value.filename or "",
                    "content_type": value.content_type or "",
                    "data_hex": data.hex(),
                }
            else:
                texts[name] = value
    return {"texts": texts, "files": files}


@app.get("/getImage")
async def get_image() -> Response:
    return Response(content=IMAGE_BYTES, media_type="image/png")


@app.api_route("/echoBody", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def echo_body(request: Request) -> dict[str, object]:
    """Reflect method, query, headers and (inflated) body."""
    body = await _read_body(request)
    return {
        "method": request.method,
        "query": dict(request.query_params),
        "headers": dict(request.headers),
        "body": body.decode("utf-8", errors="replace"),
    }


@app.get("/status/{code}")
async def status(code: int) -> Response:
    content = b"" if code in (204, 304) else f"status {code}".encode()
    return Response(content=content, status_code=code)


def echo_transport() -> httpx.ASGITransport:
    """Transport routing requests to the echo app."""
    return httpx.ASGITransport(app=app)
