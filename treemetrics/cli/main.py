import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="treemetrics",
        description="treemetrics - Weighted node metrics over dependency treebanks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    _add_apply_subparser(subparsers)
    _add_render_subparser(subparsers)
    _add_stats_subparser(subparsers)
    _add_visualize_subparser(subparsers)

    return parser


def _add_apply_subparser(subparsers):
    """Add the apply subcommand."""
    apply_parser = subparsers.add_parser(
        "apply", help="Apply the configured metrics to treebank sentences"
    )
    apply_parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="Input treebank XML file or directory",
    )
    apply_parser.add_argument(
        "-c", "--config", type=Path, default=None, help="YAML configuration file"
    )
    apply_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("output"),
        help="Output directory for JSON results (default: output)",
    )
    apply_parser.add_argument(
        "--no-save", action="store_true", help="Do not write JSON results"
    )


def _add_render_subparser(subparsers):
    """Add the render subcommand."""
    render_parser = subparsers.add_parser(
        "render", help="Print the surface text of every sentence"
    )
    render_parser.add_argument(
        "-i", "--input", type=Path, required=True, help="Input treebank XML file"
    )
    render_parser.add_argument(
        "--exclude-punctuation", action="store_true", help="Drop punctuation"
    )
    render_parser.add_argument(
        "--include-synthetic",
        action="store_true",
        help="Include words inserted by the annotator",
    )
    render_parser.add_argument(
        "--transliterate", action="store_true", help="Map Greek letters to Latin"
    )


def _add_stats_subparser(subparsers):
    """Add the stats subcommand."""
    stats_parser = subparsers.add_parser(
        "stats", help="Show structural statistics per sentence"
    )
    stats_parser.add_argument(
        "-i", "--input", type=Path, required=True, help="Input treebank XML file"
    )


def _add_visualize_subparser(subparsers):
    """Add the visualize subcommand."""
    visualize_parser = subparsers.add_parser(
        "visualize", help="Generate visualizations from apply results"
    )
    visualize_parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="Input JSON file or directory from apply",
    )
    visualize_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("output"),
        help="Output directory (default: output)",
    )
    visualize_parser.add_argument(
        "--no-html",
        dest="html",
        action="store_false",
        help="Skip the HTML report",
    )
    visualize_parser.add_argument(
        "--figures", action="store_true", help="Generate static figures (PNG/PDF)"
    )
    visualize_parser.add_argument(
        "--dpi", type=int, default=300, help="DPI for static figures (default: 300)"
    )


def cmd_apply(args) -> int:
    """Execute the apply command."""
    from ..config import build_metrics, load_config, render_flags
    from ..output.sink import ConsoleSink
    from ..pipeline import Pipeline
    from ..treebank.collection import TreebankCollection
    from ..treebank.loader import collect_treebank_files

    xml_files = collect_treebank_files(args.input)
    if not xml_files:
        print(f"No treebank files found in {args.input}")
        return 1

    config = load_config(args.config)
    metrics = build_metrics(config)
    precision = int(config["output"].get("precision", 2))

    collection = TreebankCollection(name=args.input.name)
    if collection.load(xml_files) == 0:
        print(f"No treebank in {args.input} could be loaded")
        return 1

    collection.apply(metrics, sink=ConsoleSink(), precision=precision)

    if not args.no_save:
        pipeline = Pipeline(
            metrics,
            output_dir=args.output,
            render_flags=render_flags(config),
            progress=False,
        )
        pipeline.run_documents(collection.documents)
        print(f"Results saved to {args.output}")

    print(f"Processed {len(collection)}/{len(xml_files)} treebanks")
    return 0


def cmd_render(args) -> int:
    """Execute the render command."""
    from ..rendering.sentence import RenderFlag, render
    from ..treebank.loader import load_document

    if not args.input.is_file():
        print(f"No treebank file found at {args.input}")
        return 1

    flags = RenderFlag.NONE
    if args.exclude_punctuation:
        flags |= RenderFlag.EXCLUDE_PUNCTUATION
    if args.include_synthetic:
        flags |= RenderFlag.INCLUDE_SYNTHETIC
    if args.transliterate:
        flags |= RenderFlag.TRANSLITERATE

    document = load_document(args.input)
    for sentence in document.iter_sentences():
        print(f"{sentence.sentence_id}\t{render(sentence, flags)}")

    return 0


def cmd_stats(args) -> int:
    """Execute the stats command."""
    from ..treebank.loader import load_document
    from ..treebank.statistics import tree_profile

    if not args.input.is_file():
        print(f"No treebank file found at {args.input}")
        return 1

    document = load_document(args.input)

    table = Table(title=document.get_title() or document.id)
    columns = [
        "num_of_nodes",
        "num_of_words",
        "num_of_leaves",
        "height",
        "width",
        "max_family_width",
    ]
    table.add_column("sentence")
    for column in columns:
        table.add_column(column.replace("_", " "), justify="right")

    for sentence in document.iter_sentences():
        profile = tree_profile(sentence)
        table.add_row(sentence.sentence_id, *(str(profile[c]) for c in columns))

    Console().print(table)
    return 0


def cmd_visualize(args) -> int:
    """Execute the visualize command."""
    input_path = args.input
    output_dir = args.output
    output_dir.mkdir(parents=True, exist_ok=True)

    json_files = _collect_json_files(input_path)
    if not json_files:
        print(f"No JSON files found in {input_path}")
        return 1

    docs = []
    for jf in json_files:
        try:
            docs.append(json.loads(jf.read_text(encoding="utf-8")))
        except Exception as e:
            logger.warning(f"Could not load {jf}: {e}")

    if args.html:
        from ..visualizers.html_report import generate_html_report

        report_path = generate_html_report(docs, output_dir)
        print(f"HTML report: {report_path}")

    if args.figures:
        from ..visualizers.static_figures import generate_figures

        figure_paths = generate_figures(docs, output_dir, dpi=args.dpi)
        print(f"Generated {len(figure_paths)} figures")

    return 0


def _collect_json_files(path: Path) -> List[Path]:
    """Collect JSON files from a path."""
    if path.is_file():
        return [path] if path.suffix.lower() == ".json" else []
    return sorted(path.glob("*.json"))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s"
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "apply": cmd_apply,
        "render": cmd_render,
        "stats": cmd_stats,
        "visualize": cmd_visualize,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
