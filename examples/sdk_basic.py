#!/usr/bin/env python3
"""
Basic SDK usage examples for box-view.

Walks a document through upload, status polling, viewing sessions,
downloads and cleanup. Set BOX_VIEW_API_KEY before running.
"""

import time
from pathlib import Path

from box_view import BoxViewClient, BoxViewError

SAMPLE_URL = "http://crocodoc.github.io/dot-net-box-view/Examples/Files/sample.doc"


def wait_until_done(document, poll_seconds: int = 2, attempts: int = 30):
    """Poll a document until conversion finishes."""
    for _ in range(attempts):
        document = document.client.get_document(document.id)
        if document.status in ("done", "error"):
            return document
        print(f"  status is {document.status}, waiting...")
        time.sleep(poll_seconds)
    return document


def main():
    with BoxViewClient() as client:
        try:
            print("=== Upload by URL ===")
            document = client.upload(SAMPLE_URL, name="Sample File", thumbnails=["100x100"])
            print(f"✓ Uploaded {document.id} ({document.status})")

            document = wait_until_done(document)
            print(f"✓ Conversion finished with status {document.status}")

            print("\n=== Find documents ===")
            for found in client.find_documents(limit=10, created_after="2024-01-01"):
                print(f"  {found.id} {found.name} {found.status}")

            print("\n=== Rename ===")
            document.update("Updated Sample File")
            print(f"✓ Renamed to {document.name}")

            print("\n=== Viewing session ===")
            session = document.create_session(duration=10, is_downloadable=True)
            print(f"✓ View URL: {session.view_url}")
            print(f"✓ Expires at: {session.expires_at}")

            print("\n=== Downloads ===")
            Path("sample.pdf").write_bytes(document.download("pdf"))
            Path("sample-thumbnail.png").write_bytes(document.thumbnail(100, 100))
            print("✓ Saved sample.pdf and sample-thumbnail.png")

            print("\n=== Cleanup ===")
            print(f"✓ Session deleted: {session.delete()}")
            print(f"✓ Document deleted: {document.delete()}")

        except BoxViewError as e:
            print(f"❌ {e.code}: {e.message}")


if __name__ == "__main__":
    main()
