#!/usr/bin/env python3
"""Walk a running WellNest API through register, create, publish and like."""

import os
import sys
from uuid import uuid4

import httpx
from dotenv import load_dotenv
load_dotenv()

BASE_URL = os.getenv("WELLNEST_API_URL", "http://localhost:8000")


def check(response: httpx.Response, expected: int) -> dict:
    """Fail loudly if the status code is not the expected one."""
    if response.status_code != expected:
        print(f"  ✗ {response.request.method} {response.request.url.path}: "
              f"{response.status_code} (expected {expected})")
        print(f"    {response.text}")
        sys.exit(1)
    print(f"  ✓ {response.request.method} {response.request.url.path} → {response.status_code}")
    return response.json()


def register(client: httpx.Client, name: str) -> dict:
    email = f"{name.lower()}-{uuid4().hex[:8]}@example.com"
    body = check(
        client.post("/api/auth/register", json={"email": email, "name": name, "password": "pass1234"}),
        201,
    )
    return {"Authorization": f"Bearer {body['token']}"}


def run_smoke_test():
    print("=" * 70)
    print(f"  WELLNEST API SMOKE TEST ({BASE_URL})")
    print("=" * 70)

    with httpx.Client(base_url=BASE_URL, timeout=10) as client:
        print("\n--- Health ---")
        check(client.get("/api/health/ready"), 200)

        print("\n--- Accounts ---")
        author = register(client, "Author")
        reader = register(client, "Reader")
        check(client.get("/api/auth/verify", headers=author), 200)

        print("\n--- Authoring ---")
        session = check(
            client.post(
                "/api/session/create",
                json={"title": "Smoke Yoga", "youtube_url": "https://youtu.be/abc", "tags": ["smoke"]},
                headers=author,
            ),
            201,
        )
        session_id = session["id"]
        check(
            client.patch(f"/api/session/update/{session_id}", json={"status": "published"}, headers=author),
            200,
        )
        listed = check(
            client.get("/api/session/get-all-sessions", params={"search": "smoke yoga"}, headers=reader),
            200,
        )
        print(f"  → Published sessions matching 'smoke yoga': {len(listed)}")

        print("\n--- Likes ---")
        liked = check(client.post(f"/api/session/like/{session_id}", headers=reader), 200)
        print(f"  → {liked['message']} likes={liked['session']['likes']}")
        unliked = check(client.post(f"/api/session/like/{session_id}", headers=reader), 200)
        print(f"  → {unliked['message']} likes={unliked['session']['likes']}")

        print("\n--- Cleanup ---")
        check(client.delete(f"/api/session/delete/{session_id}", headers=author), 200)

    print("\n" + "=" * 70)
    print("  SMOKE TEST COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    run_smoke_test()
