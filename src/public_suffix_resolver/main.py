from __future__ import annotations

import argparse
import sys

import structlog

from .config import settings
from .exceptions import InvalidListSource, PublicSuffixError, UnresolvableDomain
from .logging_config import setup_logging
from .models import Section
from .resolver import validate_section
from .rules import Rules
from .storage import default_rules, load_rules

log = structlog.get_logger()

_SECTION_CHOICES = {
    "effective": Section.EFFECTIVE,
    "icann": Section.ICANN,
    "private": Section.PRIVATE,
}


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="psl-resolve",
        description="Resolve the public suffix and registrable domain of domain names",
    )
    parser.add_argument("domains", nargs="+", metavar="DOMAIN", help="Domain names to resolve")
    parser.add_argument(
        "-p", "--psl-path",
        default=None,
        help="Public Suffix List file (.dat text or .json rule dump), overrides PSL_RESOLVER_PSL_PATH",
    )
    parser.add_argument(
        "-s", "--section",
        choices=sorted(_SECTION_CHOICES),
        default=None,
        help="Which list section to trust (default: effective, either section)",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def _load(psl_path: str | None) -> Rules:
    if psl_path is None:
        return default_rules()
    return load_rules(
        psl_path,
        ascii_idna_option=settings.ascii_idna_option,
        unicode_idna_option=settings.unicode_idna_option,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging("debug" if args.debug else settings.log_level)
    try:
        section = _SECTION_CHOICES[args.section] if args.section else validate_section(settings.default_section)
    except UnresolvableDomain as e:
        print(f"Invalid PSL_RESOLVER_DEFAULT_SECTION: {e}", file=sys.stderr)
        return 2
    log.info("starting_psl_resolve", domains=len(args.domains), section=str(section))

    try:
        rules = _load(args.psl_path)
    except InvalidListSource as e:
        print(f"Cannot load public suffix list: {e}", file=sys.stderr)
        return 2

    failures = 0
    for domain in args.domains:
        try:
            resolved = rules.resolve_domain(domain, section)
        except PublicSuffixError as e:
            print(f"{domain}: {e}", file=sys.stderr)
            failures += 1
            continue
        print(resolved.model_dump_json())

    log.info("run_complete", resolved=len(args.domains) - failures, failed=failures)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
