from __future__ import annotations

import argparse
from typing import List, Optional

from backend.config import settings
from backend.services.chat_client import ChatClient, render_message

QUIT_COMMANDS = {"/quit", "/exit"}


def run_chat(url: str) -> int:
    print("Describe what data you need. /quit to leave.")
    with ChatClient(base_url=url) as chat:
        while True:
            try:
                text = input("> ")
            except (EOFError, KeyboardInterrupt):
                print()
                return 0
            if text.strip() in QUIT_COMMANDS:
                return 0
            reply = chat.send(text)
            if reply is not None:
                print(render_message(reply))


def run_server(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("backend.app:app", host=host, port=port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="sqlchat", description="SQL query generator chat")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the chat bridge and browser UI")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    chat = sub.add_parser("chat", help="chat with a running bridge from the terminal")
    chat.add_argument("--url", default=settings.chat_api_url)

    args = parser.parse_args(argv)
    if args.command == "serve":
        return run_server(args.host, args.port)
    return run_chat(args.url)


if __name__ == "__main__":
    raise SystemExit(main())
