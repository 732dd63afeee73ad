"""
Response Reduction

Turns an HTTPResponse into comparable text: a status line, the headers that
are not skipped, and the body (pretty-printed and filtered when it is JSON).
"""

import json
from typing import Iterable, Sequence

from ..core.exceptions import MalformedBody
from ..core.models import HTTPResponse
from ..request.encoding import JSON_CONTENT_TYPE, get_content_type


def get_status_text(response: HTTPResponse) -> str:
    """Status line, e.g. ``HTTP/1.1 200 OK``, terminated by a newline."""
    line = f"{response.version} {response.status_code}"
    if response.reason:
        line += f" {response.reason}"
    return line + "\n"


def get_header_text(response: HTTPResponse, skip_headers: Iterable[str] = ()) -> str:
    """
    Render ``name:"value"`` lines in received order, followed by a blank line.

    Header names are lower-cased and compared case-insensitively against
    ``skip_headers``.
    """
    skipped = {name.lower() for name in skip_headers}
    lines = []
    for name, value in response.headers:
        name = name.lower()
        if name not in skipped:
            lines.append(f"{name}:{json.dumps(value, ensure_ascii=False)}\n")
    lines.append("\n")
    return "".join(lines)


def filter_json(text: str, skip_body: Sequence[str] = ()) -> str:
    """
    Remove ``skip_body`` keys from the top-level object and pretty-print.

    Nested keys are left alone. Non-object documents are only re-indented.

    Raises:
        MalformedBody: If ``text`` is not valid JSON
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedBody(
            f"Response body is not valid JSON: {e}", {"body": text[:200]}
        ) from e

    if isinstance(document, dict):
        for key in skip_body:
            document.pop(key, None)

    return json.dumps(document, indent=2, ensure_ascii=False)


def get_body_text(response: HTTPResponse, skip_body: Sequence[str] = ()) -> str:
    """Body text; JSON bodies are filtered and pretty-printed, others pass through."""
    if get_content_type(response.headers) == JSON_CONTENT_TYPE:
        return filter_json(response.text, skip_body)
    return response.text


def reduce_response(
    response: HTTPResponse,
    skip_headers: Iterable[str] = (),
    skip_body: Sequence[str] = (),
) -> str:
    """Full comparable text of a response: status, headers, blank line, body."""
    text = get_status_text(response)
    text += get_header_text(response, skip_headers)
    text += get_body_text(response, skip_body)
    if not text.endswith("\n"):
        text += "\n"
    return text
