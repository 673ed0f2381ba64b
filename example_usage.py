#!/usr/bin/env python3
"""
Basic usage examples for the Sift API client library.

Set SIFT_API_KEY and SIFT_API_SECRET, and optionally place a raw message in
test.eml next to this script to try discovery.
"""

import logging
import os
import sys
from pathlib import Path

from siftapi import SiftAPI, SiftAPIError, raise_for_code


def main():
    """Run basic usage examples."""

    api_key = os.environ.get("SIFT_API_KEY", "")
    api_secret = os.environ.get("SIFT_API_SECRET", "")
    username = "test"

    print("=== Sift API Client Basic Usage Examples ===\n")

    try:
        client = SiftAPI(api_key, api_secret)
    except SiftAPIError as e:
        print(f"Configuration error: {e}")
        print("Set SIFT_API_KEY and SIFT_API_SECRET first.")
        sys.exit(1)

    try:
        print("1. Creating user...")
        body = client.add_user(username, "en_US")
        print(f"   {body}\n")

        eml_path = Path(__file__).with_name("test.eml")
        if eml_path.exists():
            print("2. Running discovery on test.eml...")
            body = client.discovery(eml_path.read_text(encoding="utf-8"))
            print(f"   {body}\n")
        else:
            print("2. Skipping discovery (no test.eml)\n")

        print("3. Listing sifts...")
        body = raise_for_code(client.get_sifts(username, limit=10))
        print(f"   {len(body['result'])} sifts\n")

        print("4. Creating an email filter...")
        body = client.add_email_filter("Travel only", sift_types=["flight", "hotel"])
        print(f"   {body}\n")

        print("5. Deleting user...")
        body = client.delete_user(username)
        print(f"   {body}\n")

        print("=== All Examples Completed ===")

    except SiftAPIError as e:
        print(f"Sift API Error: {e}")
        sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    main()
