import argparse
import json
import os

import boto3

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "lambdas", "owlbot", "data")

FILES = {
    "buildings.json": "S3_BUILDINGS_KEY",
    "businesses.json": "S3_BUSINESSES_KEY",
    "facts.json": "S3_FACTS_KEY",
    "explore.json": "S3_EXPLORE_KEY",
}


def upload(s3, bucket: str, data_dir: str, filename: str, prefix: str) -> str:
    key = f"{prefix.rstrip('/')}/{filename}"
    with open(os.path.join(data_dir, filename), "r", encoding="utf-8") as f:
        data = json.load(f)
    body = json.dumps(data).encode("utf-8")
    s3.put_object(Bucket=bucket, Key=key, Body=body, ContentType="application/json")
    return key


def main():
    parser = argparse.ArgumentParser(description="Upload OwlBot catalogs and content pools to S3")
    parser.add_argument("bucket", help="Target S3 bucket name (S3_BUCKET_DATA)")
    parser.add_argument("--data-dir", default=DEFAULT_DATA_DIR, help="Directory holding the catalog JSON files")
    parser.add_argument("--prefix", default="data", help="Key prefix, matching the S3_*_KEY settings")
    parser.add_argument("--only", choices=sorted(FILES), action="append", help="Upload just these files")
    args = parser.parse_args()

    s3 = boto3.client("s3")
    for filename in args.only or sorted(FILES):
        key = upload(s3, args.bucket, args.data_dir, filename, args.prefix)
        print(f"Uploaded {filename} to s3://{args.bucket}/{key} (set {FILES[filename]}={key})")


if __name__ == "__main__":
    main()
