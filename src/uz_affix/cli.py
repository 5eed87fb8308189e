#!/usr/bin/env python3
"""
Uzbek suffix grammar toolkit CLI.

Loads the grammar named in uz_affix.toml by default, or override with flags:

    python -m uz_affix.cli --analyze "олмаларимизнинг"
    python -m uz_affix.cli --grammar data/uz.grammar --rules "олмалар"
    python -m uz_affix.cli --generate ot олма
    python -m uz_affix.cli --export-aff uz.aff
    python -m uz_affix.cli --show-grammar
"""

import argparse
import logging
import sys
from pathlib import Path

from uz_affix.errors import GrammarLoadError, InvalidPatternError, NameNotFoundError
from uz_affix.grammar import ConditionKind, Grammar, format_alternative


def _find_default_config() -> Path | None:
    """Look for uz_affix.toml in CWD."""
    candidate = Path("uz_affix.toml")
    if candidate.exists():
        return candidate
    return None


def format_analysis(analysis) -> str:
    parts = [f'"{analysis.root}"'] + [s.detailed_description for s in analysis.suffixes]
    return " + ".join(parts)


def print_grammar(grammar: Grammar) -> None:
    print("═══ Suffix sets ═══")
    for suffix_set in grammar.suffix_sets.values():
        header = f"SUFFIX {suffix_set.name}"
        if suffix_set.description:
            header += f': "{suffix_set.description}"'
        print(header)
        for definition in suffix_set.suffixes.values():
            cond = definition.condition
            when = f" WHEN {cond.kind.name}" if cond.kind is not ConditionKind.NONE else ""
            print(f'  {definition.suffix}: "{definition.description}"{when}')
        print()

    print("═══ Rules ═══")
    for name, group in grammar.rules.items():
        print(f"Rule '{name}':")
        for rule in group:
            desc = f': "{rule.description}"' if rule.description else ""
            print(f"  RULE {rule.name}{desc} (ID: {rule.rule_id[:8]}...)")
            for i, alternative in enumerate(rule.alternatives, 1):
                print(f"   {i}: {format_alternative(alternative)}")
        print()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Suffix grammar analyzer and form generator"
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to TOML config file (default: auto-detect uz_affix.toml)",
    )
    parser.add_argument(
        "--grammar",
        metavar="FILE",
        help="Path to a grammar file (overrides config)",
    )
    parser.add_argument(
        "--analyze",
        metavar="WORD",
        help="List every segmentation of a word",
    )
    parser.add_argument(
        "--rules",
        metavar="WORD",
        help="Analyze a word and validate its segmentations against the rules",
    )
    parser.add_argument(
        "--generate",
        nargs=2,
        metavar=("RULE", "ROOT"),
        help="Generate all forms a rule allows for a root",
    )
    parser.add_argument(
        "--export-aff",
        metavar="FILE",
        help="Write the grammar as a Hunspell .aff file",
    )
    parser.add_argument(
        "--show-grammar",
        action="store_true",
        help="Print the loaded suffix sets and rules",
    )
    parser.add_argument(
        "--limit",
        type=int,
        metavar="N",
        help="Stop the segmentation search after N candidates",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Also append log output to FILE",
    )
    args = parser.parse_args(argv)

    from uz_affix.logging_config import setup_logging

    # INFO lines (run banner, grammar loads) are only wanted in a log file.
    level = logging.INFO if args.log_file else logging.WARNING
    setup_logging(log_file=args.log_file, level=level, debug=args.debug)

    # ── Build engine ─────────────────────────────────────────────────────

    from uz_affix.engine import MorphEngine

    try:
        if args.grammar:
            engine = MorphEngine()
            engine.load_grammar(args.grammar)
        else:
            config_path = Path(args.config) if args.config else _find_default_config()
            if config_path is None:
                parser.error(
                    "No uz_affix.toml found and no --grammar flag given.\n"
                    "  Either create a config file or pass --grammar explicitly."
                )
            engine = MorphEngine.from_config(config_path)
    except (GrammarLoadError, FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    if args.limit is not None:
        engine.limit = args.limit or None

    print(engine.summary())
    print()

    try:
        # ── Show grammar ─────────────────────────────────────────────────

        if args.show_grammar:
            print_grammar(engine.grammar)

        # ── Analyze ──────────────────────────────────────────────────────

        if args.analyze:
            analyses = engine.analyze(args.analyze)
            print(f"═══ Analysis of '{args.analyze}' ═══")
            print(f"Found {len(analyses)} segmentation(s)")
            for i, a in enumerate(analyses, 1):
                print(f"  Variant {i}: {format_analysis(a)}")
                for s in a.suffixes:
                    print(f"      +{s.suffix} ({s.category}: {s.description})")
            print()

        # ── Rules ────────────────────────────────────────────────────────

        if args.rules:
            analyses = engine.analyze_by_rules(args.rules)
            matched = [a for a in analyses if a.is_matched]
            unmatched = [a for a in analyses if not a.is_matched]
            print(f"═══ Rule-based analysis of '{args.rules}' ═══")
            if matched:
                print(f"{len(matched)} valid segmentation(s)")
                for i, a in enumerate(matched, 1):
                    desc = f" - {a.rule_description}" if a.rule_description else ""
                    print(f"  ✓ Variant {i}: {format_analysis(a)}")
                    print(f"      Rule: {a.matched_rule}{desc}")
                    print(f"      Rule ID: {a.rule_id[:8]}...  Alternative: {a.alternative_index + 1}")
            if unmatched:
                print(f"{len(unmatched)} segmentation(s) matching no rule")
                for a in unmatched:
                    print(f"  ✗ {format_analysis(a)}")
            print()

        # ── Generate ─────────────────────────────────────────────────────

        if args.generate:
            rule_name, root = args.generate
            forms = engine.generate(rule_name, root)
            print(f"═══ Forms of '{root}' by rule '{rule_name}' ═══")
            for form in forms:
                print(f"  {form}")
            print(f"Generated {len(forms)} form(s)")
            print()

        # ── Export ───────────────────────────────────────────────────────

        if args.export_aff:
            flags = engine.save_affix(args.export_aff)
            print(f"Affix file written to {args.export_aff}")
            for name, flag in flags.items():
                print(f"  {flag}  {name}")
            print()

    except (NameNotFoundError, InvalidPatternError, OverflowError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
