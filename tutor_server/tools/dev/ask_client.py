#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Conversation Tutor — Dev Console Client (/ask)
----------------------------------------------
Interactive console tool for talking to the relay over HTTP.

Features:
- Simple REPL: you type, the tutor answers.
- Remembers the sessionId returned by the server, so every line continues
  the same conversation.
- /new starts a fresh conversation, /quit exits.
- Optional --tts DIR saves each answer as an mp3 via /tts.

The browser front-end is the normal client; this one is for development.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import requests

DEFAULT_SERVER = "http://127.0.0.1:3000"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Conversation Tutor — Dev Console Client (/ask)",
    )
    parser.add_argument(
        "--server",
        type=str,
        default=DEFAULT_SERVER,
        help=f"Relay base URL (default: {DEFAULT_SERVER})",
    )
    parser.add_argument(
        "--session",
        type=str,
        default=None,
        help="Resume an existing sessionId instead of starting a new one.",
    )
    parser.add_argument(
        "--tts",
        type=Path,
        default=None,
        metavar="DIR",
        help="Save every answer as DIR/answer-N.mp3 using /tts.",
    )
    parser.add_argument(
        "--voice",
        type=str,
        default=None,
        help="Voice for --tts (default: server default).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=90.0,
        help="HTTP timeout in seconds (default: 90).",
    )
    return parser.parse_args()


def send_message(
    server: str,
    message: str,
    session_id: Optional[str],
    timeout: float,
) -> Dict[str, Any]:
    """POST one message; raises RuntimeError with the server's error text."""
    body: Dict[str, Any] = {"message": message}
    if session_id:
        body["sessionId"] = session_id

    resp = requests.post(f"{server.rstrip('/')}/ask", json=body, timeout=timeout)
    if resp.status_code != 200:
        try:
            detail = resp.json().get("error")
        except ValueError:
            detail = resp.text[:200]
        raise RuntimeError(f"HTTP {resp.status_code}: {detail}")
    return resp.json()


def save_speech(
    server: str,
    text: str,
    voice: Optional[str],
    target: Path,
    timeout: float,
) -> None:
    params = {"text": text}
    if voice:
        params["voice"] = voice
    resp = requests.get(f"{server.rstrip('/')}/tts", params=params, timeout=timeout)
    resp.raise_for_status()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(resp.content)


def run(args: argparse.Namespace) -> None:
    session_id: Optional[str] = args.session
    answers = 0

    print(f"Talking to {args.server} (/new = new conversation, /quit = exit)\n")
    while True:
        try:
            line = input("You: ").strip()
        except EOFError:
            print()
            return

        if not line:
            continue
        if line in ("/quit", "/exit"):
            return
        if line == "/new":
            session_id = None
            print("[client] Starting a new conversation.\n")
            continue

        try:
            data = send_message(args.server, line, session_id, args.timeout)
        except (requests.RequestException, RuntimeError) as exc:
            print(f"[client] {exc}\n")
            continue

        session_id = data.get("sessionId") or session_id
        answer = data.get("answer", "")
        print(f"\nTutor: {answer}")
        print(f"  sessionId = {session_id}\n")

        if args.tts and answer:
            answers += 1
            target = args.tts / f"answer-{answers}.mp3"
            try:
                save_speech(args.server, answer, args.voice, target, args.timeout)
                print(f"  audio saved to {target}\n")
            except requests.RequestException as exc:
                print(f"[client] TTS failed: {exc}\n")


def main() -> None:
    args = parse_args()
    try:
        run(args)
    except KeyboardInterrupt:
        print("\nBye.")
        sys.exit(0)


if __name__ == "__main__":
    main()
