"""AWS Lambda handler for the studio generation proxy."""

import base64
import binascii
import json

from ..clients import DalleClient, GeminiClient
from ..config import DALLE_MODEL, GEMINI_API_KEY, GEMINI_IMAGE_MODEL, GEMINI_TEXT_MODEL
from ..errors import BadRequest, ConfigurationError, StudioError, UnknownRequestType
from ..models import CreativeRequest
from ..services import Dispatcher


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

CONFIG_ERROR_MESSAGE = (
    "Server configuration error: API Key is missing. "
    "Please check the GEMINI_API_KEY environment variable."
)


def build_dispatcher() -> Dispatcher:
    """Construct provider clients from config."""
    if not GEMINI_API_KEY:
        print("FATAL: GEMINI_API_KEY is not set.", flush=True)
        raise ConfigurationError(CONFIG_ERROR_MESSAGE)
    gemini = GeminiClient(
        api_key=GEMINI_API_KEY,
        image_model=GEMINI_IMAGE_MODEL,
        text_model=GEMINI_TEXT_MODEL,
    )
    return Dispatcher(gemini, dalle_factory=lambda key: DalleClient(key, model=DALLE_MODEL))


def handler(event, context):
    """
    AWS Lambda handler - triggered by API Gateway or a function URL.

    Input body:
    {
        "type": "image" | "final-render" | "ideas" | "analyze",
        "payload": {...}
    }

    Output: {"imageRef": ..., "imageUrl": ...} for image types, the parsed
    JSON object for ideas/analyze, or {"error": "..."}.
    """
    method = _get_method(event)
    print(f"API function invoked. Method: {method}", flush=True)

    if method == "OPTIONS":
        return {"statusCode": 200, "headers": dict(CORS_HEADERS), "body": ""}
    if method != "POST":
        return _response(405, {"error": "Method Not Allowed"})

    try:
        # Fails fast on a missing server key, before the body is even read
        dispatcher = build_dispatcher()

        body = _parse_body(event)
        request_type = body.get("type")
        payload = body.get("payload") or {}
        print(f"Handling request type: {request_type}", flush=True)

        result = route(dispatcher, request_type, payload)
        return _response(200, result)

    except StudioError as e:
        print(f"ERROR: {e}", flush=True)
        return _response(e.status_code, {"error": str(e)})

    except Exception as e:
        print(f"ERROR: {e}", flush=True)
        return _response(500, {"error": str(e) or "An unknown internal server error occurred."})


def route(dispatcher: Dispatcher, request_type: str | None, payload: dict):
    """Run one request type and return the JSON-serializable result."""
    if not isinstance(payload, dict):
        raise BadRequest("Payload must be an object")

    if request_type == "image":
        request = CreativeRequest.from_payload(payload)
        result = dispatcher.generate_image(request)
        print("Image generation successful.", flush=True)
        return result.to_dict()

    if request_type == "final-render":
        result = dispatcher.final_render(payload.get("base64Data"), payload.get("mimeType"))
        print("Final render successful.", flush=True)
        return result.to_dict()

    if request_type == "ideas":
        ideas = dispatcher.generate_ideas(payload.get("modelPayload"))
        print("Successfully parsed ideas JSON from AI.", flush=True)
        return ideas

    if request_type == "analyze":
        analysis_type = payload.get("analysisType")
        analysis = dispatcher.analyze(payload.get("imageParts"), analysis_type)
        print(f"Analysis '{analysis_type}' successful.", flush=True)
        return analysis

    raise UnknownRequestType(request_type)


def _get_method(event: dict) -> str:
    """HTTP method from a REST (v1) or function URL / HTTP API (v2) event."""
    method = event.get("httpMethod")
    if not method:
        method = event.get("requestContext", {}).get("http", {}).get("method")
    # Direct invocation has no HTTP framing
    return (method or "POST").upper()


def _parse_body(event: dict) -> dict:
    body = event.get("body") or "{}"
    if isinstance(body, dict):
        return body

    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            raise BadRequest(f"Invalid base64 body: {e}") from e

    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        raise BadRequest(f"Invalid JSON body: {e}") from e
    if not isinstance(parsed, dict):
        raise BadRequest("Request body must be a JSON object")
    return parsed


def _response(status_code: int, body) -> dict:
    return {
        "statusCode": status_code,
        "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
        "body": json.dumps(body),
    }


# Local testing
if __name__ == "__main__":
    import sys

    if len(sys.argv) < 3:
        print("Usage: python -m studio.handlers.generate <type> <payload_json>")
        print()
        print("Arguments:")
        print("  type         - image | final-render | ideas | analyze")
        print("  payload_json - JSON object for the request type")
        print()
        print("Example:")
        print('  python -m studio.handlers.generate image \'{"mode": "ProductPhoto", "prompt": "a blue bottle on marble", "aspectRatio": "1:1", "aiFocus": "product"}\'')
        sys.exit(1)

    event = {
        "httpMethod": "POST",
        "body": json.dumps({"type": sys.argv[1], "payload": json.loads(sys.argv[2])}),
    }

    result = handler(event, None)
    print(f"\nStatus: {result['statusCode']}")
    body = json.loads(result["body"])
    # Inline images are too long to print
    for key in ("imageRef", "imageUrl"):
        if isinstance(body, dict) and str(body.get(key, "")).startswith("data:"):
            body[key] = body[key][:64] + "..."
    print(json.dumps(body, indent=2))
