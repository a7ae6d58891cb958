#!/usr/bin/env python3
"""
Recompute hashtags, tagged_users and tagged_pets for every stored post from
its content. Tags picked in the composer (stored as extra_hashtags) are merged
back in; any other stored hashtag the content no longer produces is dropped.

Run from project root. Uses .env for credentials. Pass --dry-run to only report.
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from petsocial.dependencies import get_firestore_client
from petsocial.services import firestore_service
from petsocial.services.tagging import post_tags


def reindex(db, dry_run: bool = False) -> tuple[int, int]:
    updated = 0
    unchanged = 0
    for post in firestore_service.iter_posts(db):
        tags = post_tags(post.get("content", ""), extra_hashtags=post.get("extra_hashtags", []))
        current = {key: post.get(key, []) for key in tags}
        if current == tags:
            unchanged += 1
            continue

        print(f"  {post['id']}: {current['hashtags']} -> {tags['hashtags']}")
        if not dry_run:
            firestore_service.update_post_tags(db, post["id"], **tags)
        updated += 1
    return updated, unchanged


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--dry-run", action="store_true", help="report changes without writing them")
    args = parser.parse_args()

    try:
        db = get_firestore_client()
    except Exception as e:
        print(f"Firestore connection failed: {e}")
        return 1

    updated, unchanged = reindex(db, dry_run=args.dry_run)
    verb = "would update" if args.dry_run else "updated"
    print(f"\nDone: {verb} {updated} posts, {unchanged} already up to date")
    return 0


if __name__ == "__main__":
    sys.exit(main())
