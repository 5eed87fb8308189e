"""
One loaded grammar behind a single interface, with TOML-based configuration.

Usage:
    from uz_affix.engine import MorphEngine

    engine = MorphEngine.from_config()            # loads uz_affix.toml
    best = engine.analyze_best("олмалар")
    forms = engine.generate("ot", "олма")

    # Or build manually:
    engine = MorphEngine()
    engine.load_grammar("data/uz.grammar")
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from uz_affix.analyzer import Analyzer, WordAnalysis
from uz_affix.grammar import Grammar
from uz_affix.hunspell import AffixExporter

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "uz_affix.toml"


class MorphEngine:
    """Holds the grammar for the lifetime of the process.

    The grammar is loaded once; every analysis and generation call reads it
    without modifying it.
    """

    def __init__(self, grammar: Grammar | None = None, *, limit: int | None = None,
                 lang: str = "uz"):
        self._grammar = grammar
        self.limit = limit or None
        self.lang = lang
        self.grammar_path: Path | None = None

    # ── Construction helpers ─────────────────────────────────────────────

    def load_grammar(self, path: str | Path) -> Grammar:
        """Load a grammar file, replacing whatever was loaded before."""
        from uz_affix.parser import load

        path = Path(path)
        grammar = load(path)
        self._grammar = grammar
        self.grammar_path = path
        logger.info(
            "Loaded grammar %s: %d suffix sets, %d suffixes, %d rules",
            path, len(grammar.suffix_sets), grammar.num_suffixes, len(grammar.rules),
        )
        return grammar

    @classmethod
    def from_config(cls, config_path: str | Path = DEFAULT_CONFIG) -> MorphEngine:
        """Build a MorphEngine from a TOML config file.

        Paths in the config are resolved relative to the config file's
        directory.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        with config_path.open("rb") as f:
            cfg = tomllib.load(f)

        base_dir = config_path.parent

        analysis_cfg = cfg.get("analysis", {})
        export_cfg = cfg.get("export", {})
        engine = cls(
            limit=analysis_cfg.get("limit") or None,
            lang=export_cfg.get("lang", "uz"),
        )

        grammar_path = cfg.get("grammar", {}).get("path")
        if not grammar_path:
            raise ValueError(f"[grammar] path not configured in {config_path}")
        engine.load_grammar(_resolve_config_path(grammar_path, base_dir))

        return engine

    # ── Access ───────────────────────────────────────────────────────────

    @property
    def grammar(self) -> Grammar:
        if self._grammar is None:
            raise RuntimeError("No grammar loaded")
        return self._grammar

    @property
    def analyzer(self) -> Analyzer:
        return Analyzer(self.grammar, limit=self.limit)

    # ── Analysis / generation ────────────────────────────────────────────

    def analyze(self, word: str) -> list[WordAnalysis]:
        """All segmentations of a word, ranked."""
        return self.analyzer.analyze_all(word)

    def analyze_best(self, word: str) -> WordAnalysis:
        return self.analyzer.analyze_best(word)

    def analyze_by_rules(self, word: str) -> list[WordAnalysis]:
        return self.analyzer.analyze_by_rules(word)

    def generate(self, rule_name: str, root: str) -> list[str]:
        return self.analyzer.generate_forms(rule_name, root)

    # ── Export ───────────────────────────────────────────────────────────

    def export_affix(self) -> str:
        return AffixExporter(self.grammar, lang=self.lang).to_aff()

    def save_affix(self, path: str | Path) -> dict[str, str]:
        """Write the .aff file and return the suffix-set → flag mapping."""
        exporter = AffixExporter(self.grammar, lang=self.lang)
        exporter.save(path)
        return exporter.flag_mapping()

    # ── Introspection ────────────────────────────────────────────────────

    def summary(self) -> str:
        source = self.grammar_path or "<in-memory>"
        lines = [f"MorphEngine with grammar {source}:"]
        for sub_line in self.grammar.summary().split("\n"):
            lines.append(f"  {sub_line}")
        if self.limit:
            lines.append(f"  Result limit:   {self.limit}")
        return "\n".join(lines)


def _resolve_config_path(raw_path: str, base_dir: Path) -> Path:
    path = Path(raw_path)
    return path if path.is_absolute() else base_dir / path
