import argparse
import base64
import mimetypes
import sys
from pathlib import Path

import httpx

DEFAULT_API_URL = "http://localhost:8080/chat"


def encode_image_file(image_path: Path) -> str:
    """Return the file at *image_path* as a data-URL."""
    mime_type = mimetypes.guess_type(image_path.name)[0] or "application/octet-stream"
    payload = base64.b64encode(image_path.read_bytes()).decode()
    return f"data:{mime_type};base64,{payload}"


def build_payload(message: str | None, image: str | None) -> dict:
    payload = {}
    if message:
        payload["message"] = message
    if image:
        image_path = Path(image)
        if not image_path.exists():
            raise FileNotFoundError(image)
        payload["image"] = encode_image_file(image_path)
    return payload


def main(argv=None):
    parser = argparse.ArgumentParser(description="Send a message and/or image to a gemini-relay server")
    parser.add_argument("--message", "-m", type=str, help="Text prompt", required=False)
    parser.add_argument("--image", "-i", type=str, help="Path to image file", required=False)
    parser.add_argument("--api-url", type=str, default=DEFAULT_API_URL, help="URL of the /chat endpoint")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds to wait for a reply (default: no limit)")
    args = parser.parse_args(argv)

    if not args.message and not args.image:
        parser.error("provide --message, --image or both")

    try:
        payload = build_payload(args.message, args.image)
    except FileNotFoundError:
        print(f"Image file not found: {args.image}", file=sys.stderr)
        return 1

    print(f"Sending request to {args.api_url}...\n", file=sys.stderr)
    try:
        response = httpx.post(args.api_url, json=payload, timeout=args.timeout)
    except httpx.HTTPError as e:
        print(f"Error: could not reach {args.api_url}: {e}", file=sys.stderr)
        return 1

    if response.status_code != 200:
        try:
            detail = response.json().get("error", response.text)
        except ValueError:
            detail = response.text
        print(f"Error: {response.status_code} {detail}", file=sys.stderr)
        return 1

    print(response.json()["response"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
