"""Minimal CLI for the few-shot engine using argparse."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from fewshot.config import Settings


def _settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if args.corpus:
        from dataclasses import replace

        settings = replace(settings, corpus_path=args.corpus)
    return settings


def _get_fewshot(args: argparse.Namespace) -> "FewShot":  # noqa: F821
    from fewshot.engine import FewShot

    return FewShot(_settings(args))


def cmd_inject(args: argparse.Namespace) -> None:
    from fewshot.hook import run_hook

    run_hook(sys.stdin, sys.stdout, _settings(args))


def cmd_query(args: argparse.Namespace) -> None:
    fs = _get_fewshot(args)
    selection = fs.select(args.text, max_examples=args.limit, min_rating=args.min_rating)
    print(f"Task type:  {selection.task_type}")
    print(f"Confidence: {selection.confidence:.3f}")
    if selection.reasoning:
        print(f"Reasoning:  {selection.reasoning}")
    if not selection.matches:
        print("No examples.")
        return
    print()
    for m in selection.matches:
        ex = m.example
        print(f"[{m.score:.3f}] {ex.id}  ({ex.task_type}, rating {ex.rating}/10, used {ex.access_count}x)")
        print(f"  Prompt:  {ex.prompt[:100]}")
        if ex.summary:
            print(f"  Summary: {ex.summary[:100]}")
        print()


def cmd_classify(args: argparse.Namespace) -> None:
    from fewshot.classify import classify

    print(classify(args.text))


def cmd_list(args: argparse.Namespace) -> None:
    fs = _get_fewshot(args)
    examples = fs.list(limit=args.limit)
    if not examples:
        print("No examples.")
        return
    print(f"{'ID':<28} {'Type':<12} {'Rating':<7} {'Used':<5} {'Prompt':<50}")
    print("-" * 100)
    for ex in examples:
        print(f"{ex.id[:28]:<28} {ex.task_type:<12} {ex.rating:<7} {ex.access_count:<5} {ex.prompt[:50]:<50}")


def cmd_stats(args: argparse.Namespace) -> None:
    fs = _get_fewshot(args)
    stats = fs.stats()
    print(f"Corpus:         {fs.settings.corpus_path} ({stats.status})")
    print(f"Examples:       {stats.total}")
    print(f"Rankable:       {stats.rankable}")
    print(f"Skipped:        {stats.skipped}")
    print(f"Average rating: {stats.average_rating:.1f}")
    for task_type, count in stats.by_task_type.items():
        print(f"  {task_type:<12} {count}")


def cmd_export(args: argparse.Namespace) -> None:
    fs = _get_fewshot(args)
    examples = fs.export_examples(path=args.output)
    if args.output:
        print(f"Exported {len(examples)} examples to {args.output}")
    else:
        payload = {"version": 1, "examples": examples}
        print(json.dumps(payload, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fewshot",
        description="Few-shot example retrieval from episodic memory",
    )
    parser.add_argument("--corpus", default=None, help="Path to the examples JSON file")

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("inject", help="Hook mode: read a JSON payload on stdin, print examples")

    p = sub.add_parser("query", help="Show ranked examples for a prompt")
    p.add_argument("text", help="Prompt text")
    p.add_argument("--limit", type=int, default=None)
    p.add_argument("--min-rating", type=int, default=None)

    p = sub.add_parser("classify", help="Print the task type of a prompt")
    p.add_argument("text", help="Prompt text")

    p = sub.add_parser("list", help="List examples")
    p.add_argument("--limit", type=int, default=None)

    sub.add_parser("stats", help="Corpus statistics")

    p = sub.add_parser("export", help="Export examples to JSON")
    p.add_argument("-o", "--output", default=None, help="Output file path")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    handlers = {
        "inject": cmd_inject,
        "query": cmd_query,
        "classify": cmd_classify,
        "list": cmd_list,
        "stats": cmd_stats,
        "export": cmd_export,
    }
    handlers[args.command](args)


if __name__ == "__main__":
    main()
