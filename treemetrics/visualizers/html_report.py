import html
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import plotly.graph_objects as go

from ..analyzers.similarity import ProfileSimilarityAnalyzer

logger = logging.getLogger(__name__)


def generate_html_report(docs: List[Dict[str, Any]], output_dir: Path) -> Path:
    """Generate an interactive HTML report of pipeline results using Plotly."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / "report.html"

    figures_html = []
    for builder in (
        _create_trajectory_chart,
        _create_tree_shape_chart,
        _create_summary_chart,
        _create_similarity_heatmap,
    ):
        fig = builder(docs)
        if fig is not None:
            figures_html.append(fig.to_html(full_html=False, include_plotlyjs=False))

    html_content = _wrap_html(figures_html, docs)

    report_path.write_text(html_content, encoding="utf-8")
    logger.info(f"Generated HTML report: {report_path}")

    return report_path


def _doc_name(doc: Dict[str, Any], i: int) -> str:
    return Path(doc.get("source_path") or f"doc_{i}").stem


def _create_trajectory_chart(docs: List[Dict]) -> Optional[Any]:
    """Line chart of the first metric per sentence, one trace per document."""
    names = docs[0].get("metric_names", []) if docs else []
    if not names:
        return None

    fig = go.Figure()
    palette = _get_color_palette(len(docs))
    for i, doc in enumerate(docs):
        sentences = doc.get("sentences", [])
        fig.add_trace(
            go.Scatter(
                x=list(range(1, len(sentences) + 1)),
                y=[s["values"].get(names[0], 0.0) for s in sentences],
                mode="lines+markers",
                name=_doc_name(doc, i),
                text=[s.get("id", "") for s in sentences],
                line_color=palette[i],
            )
        )

    buttons = []
    for name in names:
        buttons.append(
            dict(
                label=name,
                method="update",
                args=[
                    {
                        "y": [
                            [s["values"].get(name, 0.0) for s in doc.get("sentences", [])]
                            for doc in docs
                        ]
                    },
                    {"yaxis": {"title": name}},
                ],
            )
        )

    fig.update_layout(
        title="Metric Values per Sentence",
        xaxis_title="Sentence",
        yaxis_title=names[0],
        updatemenus=[dict(buttons=buttons, direction="down", x=1.0, y=1.15)],
        height=450,
    )

    return fig


def _create_tree_shape_chart(docs: List[Dict]) -> Optional[Any]:
    """Scatter of sentence tree height against width."""
    if not any(doc.get("sentences") for doc in docs):
        return None

    fig = go.Figure()
    palette = _get_color_palette(len(docs))
    for i, doc in enumerate(docs):
        sentences = doc.get("sentences", [])
        fig.add_trace(
            go.Scatter(
                x=[s.get("profile", {}).get("width", 0) for s in sentences],
                y=[s.get("profile", {}).get("height", 0) for s in sentences],
                mode="markers",
                name=_doc_name(doc, i),
                text=[s.get("text", "") for s in sentences],
                marker=dict(color=palette[i], opacity=0.6),
            )
        )

    fig.update_layout(
        title="Sentence Tree Shape",
        xaxis_title="Width",
        yaxis_title="Height",
        height=450,
    )

    return fig


def _create_summary_chart(docs: List[Dict]) -> Optional[Any]:
    """Heatmap of per-document metric means."""
    names = docs[0].get("metric_names", []) if docs else []
    if not names:
        return None

    z_data = [[doc.get("summary", {}).get(n, 0.0) for n in names] for doc in docs]
    doc_names = [_doc_name(doc, i) for i, doc in enumerate(docs)]

    fig = go.Figure(
        [go.Heatmap(z=z_data, x=names, y=doc_names, colorscale="Blues")]
    )

    fig.update_layout(
        title="Metric Means per Document",
        xaxis_title="Metric",
        yaxis_title="Document",
        height=max(300, len(docs) * 30),
    )

    return fig


def _create_similarity_heatmap(docs: List[Dict]) -> Optional[Any]:
    """Heatmap of document tree-profile similarity."""
    with_summary = [doc for doc in docs if doc.get("summary")]
    if len(with_summary) < 2:
        return None

    matrix = ProfileSimilarityAnalyzer().similarity_matrix(with_summary)
    doc_names = [_doc_name(doc, i) for i, doc in enumerate(with_summary)]

    fig = go.Figure(
        [
            go.Heatmap(
                z=matrix,
                x=doc_names,
                y=doc_names,
                colorscale="RdBu",
                zmin=-1,
                zmax=1,
            )
        ]
    )

    fig.update_layout(
        title="Document Similarity Matrix (Cosine)",
        height=max(400, len(doc_names) * 40),
    )

    return fig


def _get_color_palette(n: int) -> List[str]:
    """Get a colorblind-friendly color palette."""
    base_colors = [
        "#2E86AB",
        "#A23B72",
        "#F18F01",
        "#C73E1D",
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
    ]
    return (base_colors * ((n // len(base_colors)) + 1))[:n]


def _wrap_html(figures_html: List[str], docs: List[Dict]) -> str:
    """Wrap figure HTML in a complete HTML document."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    figures_section = "\n".join(
        f'<div class="figure-container">{fig}</div>' for fig in figures_html
    )

    stats = _compute_summary_stats(docs)
    doc_rows = "".join(
        f"<tr><td>{html.escape(_doc_name(doc, i))}</td>"
        f"<td>{html.escape(doc.get('title', ''))}</td>"
        f"<td>{len(doc.get('sentences', []))}</td></tr>"
        for i, doc in enumerate(docs)
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>treemetrics Report</title>
    <script src="https://cdn.plot.ly/plotly-2.27.0.min.js"></script>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
        }}
        h1 {{
            color: #2E86AB;
            border-bottom: 2px solid #2E86AB;
            padding-bottom: 10px;
        }}
        .summary, .figure-container {{
            background: white;
            padding: 20px;
            border-radius: 8px;
            margin-bottom: 20px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }}
        .summary-grid {{
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
            gap: 15px;
        }}
        .stat-card {{
            background: #f8f9fa;
            padding: 15px;
            border-radius: 6px;
            text-align: center;
        }}
        .stat-value {{
            font-size: 2em;
            font-weight: bold;
            color: #2E86AB;
        }}
        .stat-label {{
            color: #666;
            font-size: 0.9em;
        }}
        table {{ border-collapse: collapse; width: 100%; }}
        th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
        th {{ background: #2E86AB; color: white; }}
        .timestamp {{
            color: #666;
            font-size: 0.9em;
        }}
    </style>
</head>
<body>
    <h1>treemetrics Report</h1>
    <p class="timestamp">Generated: {timestamp}</p>

    <div class="summary">
        <h2>Summary Statistics</h2>
        <div class="summary-grid">
            <div class="stat-card">
                <div class="stat-value">{stats["total_docs"]}</div>
                <div class="stat-label">Documents</div>
            </div>
            <div class="stat-card">
                <div class="stat-value">{stats["total_sentences"]:,}</div>
                <div class="stat-label">Sentences</div>
            </div>
            <div class="stat-card">
                <div class="stat-value">{stats["total_nodes"]:,}</div>
                <div class="stat-label">Tree Nodes</div>
            </div>
            <div class="stat-card">
                <div class="stat-value">{stats["total_words"]:,}</div>
                <div class="stat-label">Words</div>
            </div>
        </div>
        <table>
            <tr><th>Document</th><th>Title</th><th>Sentences</th></tr>
            {doc_rows}
        </table>
    </div>

    {figures_section}
</body>
</html>"""


def _compute_summary_stats(docs: List[Dict]) -> Dict[str, int]:
    """Compute summary statistics for the report."""
    total_sentences = 0
    total_nodes = 0
    total_words = 0

    for doc in docs:
        for sentence in doc.get("sentences", []):
            total_sentences += 1
            profile = sentence.get("profile", {})
            total_nodes += profile.get("num_of_nodes", 0)
            total_words += profile.get("num_of_words", 0)

    return {
        "total_docs": len(docs),
        "total_sentences": total_sentences,
        "total_nodes": total_nodes,
        "total_words": total_words,
    }
