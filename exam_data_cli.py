import argparse
import os
import sys
from typing import Dict, Optional

import requests

DEFAULT_BASE_URL = os.getenv("MOCK_EXAM_API_URL", "http://localhost:8000")


def import_questions(base_url: str, csv_path: str) -> Optional[Dict]:
    """
    Upload a question CSV to a running server

    Args:
        base_url: Server root, e.g. http://localhost:8000
        csv_path: Path to the CSV file (header + one question per row)

    Returns:
        {"success": n, "errors": m}, or None if the request failed
    """
    url = f"{base_url.rstrip('/')}/api/import-csv"
    try:
        with open(csv_path, "rb") as f:
            response = requests.post(
                url,
                files={"csvFile": (os.path.basename(csv_path), f, "text/csv")},
                timeout=60,
            )
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        print(f"API request failed: {e}")
        return None


def export_scores(base_url: str) -> Optional[str]:
    """
    Download the score history CSV

    Returns:
        CSV text, or None if the request failed
    """
    url = f"{base_url.rstrip('/')}/api/scores/export"
    try:
        response = requests.get(url, timeout=60)
        response.raise_for_status()
        response.encoding = "utf-8"
        return response.text
    except requests.exceptions.RequestException as e:
        print(f"API request failed: {e}")
        return None


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Import questions / export scores for the mock exam server')
    parser.add_argument('--base-url', type=str, default=DEFAULT_BASE_URL,
                        help=f'Server URL (default: {DEFAULT_BASE_URL})')
    subparsers = parser.add_subparsers(dest='command', required=True)

    import_parser = subparsers.add_parser('import', help='Upload a question CSV')
    import_parser.add_argument('csv_path', type=str, help='CSV file to upload')

    export_parser = subparsers.add_parser('export', help='Download score history as CSV')
    export_parser.add_argument('--output', type=str, default='exam_scores.csv',
                               help='Output file (default: exam_scores.csv)')

    args = parser.parse_args(argv)

    if args.command == 'import':
        if not os.path.exists(args.csv_path):
            print(f"File not found: {args.csv_path}")
            return 1
        result = import_questions(args.base_url, args.csv_path)
        if result is None:
            return 1
        print(f"Imported {result.get('success', 0)} questions, {result.get('errors', 0)} rows rejected")
        return 0

    content = export_scores(args.base_url)
    if content is None:
        return 1
    with open(args.output, 'w', encoding='utf-8') as f:
        f.write(content)
    rows = max(0, len(content.strip().splitlines()) - 1)
    print(f"Saved {rows} scores to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
