"""CLI listing the static question categories and their weights."""

from __future__ import annotations

import argparse
import json

from fitqa.classification.lexicon import CategoryLexicon, load_default_lexicon


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="List question categories")
    parser.add_argument("--lexicon-path", default=None, help="Alternative lexicon JSON file")
    args = parser.parse_args(argv)

    lexicon = CategoryLexicon.from_path(args.lexicon_path) if args.lexicon_path else load_default_lexicon()
    payload = {
        "default_category": lexicon.default_category,
        "categories": [category.to_dict() for category in lexicon],
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
