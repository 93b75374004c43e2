#!/usr/bin/env python3
"""
WebSocket Test Client for voxroom

Usage:
    python ws_test_client.py <server_url> <room_id> <username>

Examples:
    python ws_test_client.py ws://localhost:8000 lobby alice
    python ws_test_client.py wss://your-server.com lobby bob  # For HTTPS

Commands (while connected):
    - Type any message and press Enter to send a chat message
    - /typing on | /typing off   send a typing indicator
    - /signal <json>             relay a raw signaling payload to the others
    - Type 'quit' or 'exit' to disconnect
    - Press Ctrl+C to force disconnect
"""

import asyncio
import json
import sys
from datetime import datetime
from urllib.parse import urlencode

import websockets


def format_timestamp(ts: int | None) -> str:
    """Format an epoch-ms timestamp for display."""
    if ts is None:
        return "--:--:--"
    return datetime.fromtimestamp(ts / 1000).strftime("%H:%M:%S")


def print_message(msg: dict) -> None:
    """Pretty print a received WebSocket message."""
    msg_type = msg.get("type", "unknown")

    print()
    if msg_type == "system":
        print(f"📢 {msg.get('text', '')}")
        print(f"   In room: {', '.join(msg.get('users', [])) or '-'}")

    elif msg_type == "users":
        users = msg.get("users", [])
        print(f"👥 ROSTER ({len(users)}): {', '.join(users) or '-'}")

    elif msg_type == "message":
        ts = format_timestamp(msg.get("at"))
        print(f"💬 [{ts}] {msg.get('username', 'Unknown')}: {msg.get('text', '')}")

    elif msg_type == "typing":
        state = "is typing..." if msg.get("isTyping") else "stopped typing"
        print(f"✏️  {msg.get('username', 'Unknown')} {state}")

    elif msg_type == "signal":
        print(f"📡 SIGNAL from {msg.get('from', 'Unknown')}")
        print(f"   {json.dumps(msg.get('signal'), default=str)}")

    else:
        print(f"📨 UNKNOWN MESSAGE TYPE: {msg_type}")
        print(f"   {json.dumps(msg, indent=2, default=str)}")


def build_frame(user_input: str) -> dict | None:
    """Turn a line of input into a client frame, or None if it is not valid."""
    if user_input.startswith("/typing"):
        arg = user_input[len("/typing"):].strip().lower()
        return {"type": "typing", "isTyping": arg != "off"}

    if user_input.startswith("/signal"):
        body = user_input[len("/signal"):].strip()
        try:
            payload = json.loads(body) if body else None
        except json.JSONDecodeError:
            print("⚠️  /signal expects a JSON payload")
            return None
        return {"type": "signal", "signal": payload}

    return {"type": "message", "text": user_input}


async def receive_messages(websocket) -> None:
    """Task to continuously receive and print messages."""
    try:
        async for message in websocket:
            try:
                msg = json.loads(message)
                print_message(msg)
            except json.JSONDecodeError:
                print(f"\n⚠️  Received non-JSON message: {message}")
            print("[You] > ", end="", flush=True)
    except websockets.exceptions.ConnectionClosed as e:
        print(f"\n❌ Connection closed: {e}")


async def send_messages(websocket) -> None:
    """Task to read user input and send frames."""
    loop = asyncio.get_running_loop()

    print("\n✅ Connected! Type a message and press Enter to send.")
    print("   Type 'quit' or 'exit' to disconnect.\n")

    while True:
        try:
            print("[You] > ", end="", flush=True)
            user_input = await loop.run_in_executor(None, sys.stdin.readline)
            user_input = user_input.strip()

            if not user_input:
                continue

            if user_input.lower() in ("quit", "exit"):
                print("👋 Disconnecting...")
                await websocket.close()
                break

            frame = build_frame(user_input)
            if frame is None:
                continue
            await websocket.send(json.dumps(frame))

        except websockets.exceptions.ConnectionClosed:
            print("\n❌ Connection was closed")
            break


async def main(server_url: str, room_id: str, username: str) -> None:
    """Connect and pump messages both ways until one side finishes."""
    ws_url = f"{server_url}/api/ws?{urlencode({'roomId': room_id, 'username': username})}"

    print(f"🔌 Connecting to: {ws_url}")
    print("-" * 60)

    try:
        async with websockets.connect(ws_url) as websocket:
            receive_task = asyncio.create_task(receive_messages(websocket))
            send_task = asyncio.create_task(send_messages(websocket))

            done, pending = await asyncio.wait(
                [receive_task, send_task],
                return_when=asyncio.FIRST_COMPLETED
            )

            for task in pending:
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

    except websockets.exceptions.InvalidStatus as e:
        status_code = e.response.status_code
        print(f"❌ Connection failed with status code: {status_code}")
        if status_code == 403:
            print("   Refused by server. Both room id and username are required.")
    except websockets.exceptions.InvalidURI as e:
        print(f"❌ Invalid URI: {e}")
        print("   Make sure the server URL starts with ws:// or wss://")
    except ConnectionRefusedError:
        print("❌ Connection refused. Is the server running?")


if __name__ == "__main__":
    if len(sys.argv) != 4:
        print(__doc__)
        print(f"Usage: python {sys.argv[0]} <server_url> <room_id> <username>")
        sys.exit(1)

    server_url = sys.argv[1].rstrip("/")
    room_id, username = sys.argv[2], sys.argv[3]

    if not server_url.startswith(("ws://", "wss://")):
        print("⚠️  Warning: URL should start with ws:// or wss://")
        print("   Assuming ws:// prefix...")
        server_url = f"ws://{server_url}"

    try:
        asyncio.run(main(server_url, room_id, username))
    except KeyboardInterrupt:
        print("\n\n👋 Interrupted by user. Goodbye!")
        sys.exit(0)
