#!/usr/bin/env python3
from __future__ import annotations

import argparse
import uuid
from typing import Any

import httpx
from httpx import ConnectError


def build_payload(sender_id: str, receiver_id: str, text: str, msg_type: str) -> dict[str, Any]:
    return {
        "senderId": sender_id,
        "receiverId": receiver_id,
        "msgBody": text,
        "msgType": msg_type,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Store a message and read it back")
    parser.add_argument("--url", default="http://localhost:8080")
    parser.add_argument("--sender", default=str(uuid.uuid4()))
    parser.add_argument("--receiver", default=str(uuid.uuid4()))
    parser.add_argument("--text", default="Hello world")
    parser.add_argument("--type", default="Text", choices=["Text", "Video", "Link"])
    args = parser.parse_args()

    payload = build_payload(args.sender, args.receiver, args.text, args.type)

    try:
        resp = httpx.post(f"{args.url}/messages", json=payload, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the server running?")
        print("Try: STORE_PROVIDER=memory message-store")
        return

    print(resp.status_code)
    print(resp.text)
    if resp.status_code != 201:
        return

    stored = resp.json()
    resp = httpx.get(f"{args.url}/messages/{stored['receiverId']}/{stored['messageId']}", timeout=10.0)
    print(resp.status_code)
    print(resp.text)


if __name__ == "__main__":
    main()
