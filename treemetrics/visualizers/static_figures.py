import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from ..analyzers.similarity import ProfileSimilarityAnalyzer  # noqa: E402

logger = logging.getLogger(__name__)

MAX_TRAJECTORY_PANELS = 6


def generate_figures(
    docs: List[Dict[str, Any]], output_dir: Path, dpi: int = 300
) -> List[Path]:
    """Generate static publication-ready figures from pipeline results."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    plt.style.use("seaborn-v0_8-whitegrid")

    builders = [
        ("metric_trajectories", _create_trajectory_figure),
        ("tree_shape", _create_tree_shape_figure),
        ("metric_summary", _create_summary_figure),
        ("similarity_matrix", _create_similarity_matrix_figure),
    ]

    generated = []
    for stem, builder in builders:
        fig = builder(docs)
        if fig is None:
            continue
        for ext in ["png", "pdf"]:
            path = output_dir / f"{stem}.{ext}"
            fig.savefig(path, dpi=dpi, bbox_inches="tight", facecolor="white")
            generated.append(path)
        plt.close(fig)

    logger.info(f"Generated {len(generated)} figure files")
    return generated


def _doc_name(doc: Dict[str, Any], i: int) -> str:
    return Path(doc.get("source_path") or f"doc_{i}").stem


def _create_trajectory_figure(docs: List[Dict]) -> Optional[Any]:
    """One panel per metric: value per sentence, one line per document."""
    names = docs[0].get("metric_names", [])[:MAX_TRAJECTORY_PANELS] if docs else []
    if not names or not any(doc.get("sentences") for doc in docs):
        return None

    colors = _get_mpl_colors(len(docs))
    fig, axes = plt.subplots(len(names), 1, figsize=(10, 2.5 * len(names)), squeeze=False)

    for ax, name in zip(axes[:, 0], names):
        for i, doc in enumerate(docs):
            values = [s["values"].get(name, 0.0) for s in doc.get("sentences", [])]
            ax.plot(
                range(1, len(values) + 1),
                values,
                marker="o",
                markersize=3,
                linewidth=1.5,
                color=colors[i],
                label=_doc_name(doc, i),
            )
        ax.set_ylabel(name, fontsize=8)
        for spine in ax.spines.values():
            spine.set_visible(False)
        ax.tick_params(axis="both", length=0)

    axes[-1, 0].set_xlabel("Sentence")
    if len(docs) <= 10:
        axes[0, 0].legend(fontsize=8, loc="upper right")
    axes[0, 0].set_title("Metric Values per Sentence")

    plt.tight_layout()
    return fig


def _create_tree_shape_figure(docs: List[Dict]) -> Optional[Any]:
    """Height against width of every sentence tree, colored by document."""
    points = []
    for i, doc in enumerate(docs):
        for sentence in doc.get("sentences", []):
            profile = sentence.get("profile", {})
            points.append((i, profile.get("height", 0), profile.get("width", 0)))

    if not points:
        return None

    colors = _get_mpl_colors(len(docs))
    fig, ax = plt.subplots(figsize=(8, 6))

    for i, doc in enumerate(docs):
        xs = [p[2] for p in points if p[0] == i]
        ys = [p[1] for p in points if p[0] == i]
        if xs:
            ax.scatter(xs, ys, alpha=0.6, color=colors[i], label=_doc_name(doc, i))

    ax.set_xlabel("Width")
    ax.set_ylabel("Height")
    ax.set_title("Sentence Tree Shape")
    if len(docs) <= 10:
        ax.legend(fontsize=8)

    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.tick_params(axis="both", length=0)

    plt.tight_layout()
    return fig


def _create_summary_figure(docs: List[Dict]) -> Optional[Any]:
    """Mean value of each metric per document, as grouped horizontal bars."""
    names = docs[0].get("metric_names", []) if docs else []
    if not names:
        return None

    colors = _get_mpl_colors(len(docs))
    bar_height = 0.8 / len(docs)
    fig, ax = plt.subplots(figsize=(10, max(3, 0.6 * len(names) * len(docs))))

    for i, doc in enumerate(docs):
        summary = doc.get("summary", {})
        ax.barh(
            [j + i * bar_height for j in range(len(names))],
            [summary.get(name, 0.0) for name in names],
            height=bar_height,
            color=colors[i],
            label=_doc_name(doc, i),
        )

    ax.set_yticks([j + 0.4 - bar_height / 2 for j in range(len(names))])
    ax.set_yticklabels(names, fontsize=8)
    ax.invert_yaxis()
    ax.set_xlabel("Mean per sentence")
    ax.set_title("Metric Summary")
    if len(docs) <= 10:
        ax.legend(fontsize=8)

    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.tick_params(axis="both", length=0)

    plt.tight_layout()
    return fig


def _create_similarity_matrix_figure(docs: List[Dict]) -> Optional[Any]:
    """Cosine similarity of the documents' metric profiles."""
    with_summary = [doc for doc in docs if doc.get("summary")]
    if len(with_summary) < 2:
        return None

    matrix = ProfileSimilarityAnalyzer().similarity_matrix(with_summary)
    doc_names = [_doc_name(doc, i) for i, doc in enumerate(with_summary)]

    fig, ax = plt.subplots(figsize=(10, 8))

    im = ax.imshow(matrix, cmap="RdBu", vmin=-1, vmax=1)

    ax.set_xticks(range(len(doc_names)))
    ax.set_yticks(range(len(doc_names)))
    ax.set_xticklabels(doc_names, rotation=45, ha="right", fontsize=8)
    ax.set_yticklabels(doc_names, fontsize=8)

    cbar = plt.colorbar(im, ax=ax)
    cbar.set_label("Cosine Similarity")

    ax.set_title("Document Tree-Profile Similarity")

    plt.tight_layout()
    return fig


def _get_mpl_colors(n: int) -> List[str]:
    """Get a colorblind-friendly color palette for matplotlib."""
    base_colors = [
        "#2E86AB",
        "#A23B72",
        "#F18F01",
        "#3B1F2B",
        "#95C623",
        "#1B998B",
        "#ED217C",
        "#7B68EE",
        "#FF6B6B",
        "#4ECDC4",
        "#45B7D1",
        "#96CEB4",
        "#FFEAA7",
        "#DDA0DD",
        "#C73E1D",
    ]
    return (base_colors * ((n // len(base_colors)) + 1))[:n]
