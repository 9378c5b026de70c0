"""
topic_visualizations.py
------------------------
Charts of decade-level topic proportions.

This module:
    • Builds a colour palette from a named plotly palette / colorscale
    • Renders a static stacked bar chart (matplotlib, PNG)
    • Renders an interactive stacked bar chart (plotly, HTML)
    • Renders an interactive streamgraph (plotly, HTML)
    • Writes standalone HTML files and iframe snippets to embed them

Input for every chart is the long table produced by
topic_over_time.aggregate_by_decade (`decade`, `topic`, `label`,
`proportion`).

It can be re-run on a saved pipeline output without re-fitting:

    python -m topicstream.nlp.topic_visualizations
"""

import html
import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import plotly.colors as pcolors
import plotly.graph_objects as go

from topicstream.nlp.topic_over_time import proportions_wide
from topicstream.utils.config import (
    CHART_HEIGHT,
    CHART_WIDTH,
    PALETTE_NAME,
    TOPIC_DIR,
    VIS_DIR,
)
from topicstream.utils.logger import get_logger

logger = get_logger("TopicVisualizations")

HOVER_TEMPLATE = (
    "<b>%{customdata[0]}</b><br>"
    "Decade: %{x}s<br>"
    "Proportion: %{customdata[1]:.1%}<br>"
    "Documents in decade: %{customdata[2]}"
    "<extra></extra>"
)


# -------------------------------------------------------
# PALETTES
# -------------------------------------------------------
def _to_hex(color: str) -> str:
    if color.startswith("#"):
        return color.lower()
    r, g, b = (int(round(c)) for c in pcolors.unlabel_rgb(color)[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def build_palette(name: str = PALETTE_NAME, size: int = 15) -> list[str]:
    """
    Return `size` hex colours.

    Qualitative palettes (plotly.colors.qualitative: "Set3", "Pastel",
    "Dark24", ...) are cycled when `size` exceeds their length;
    any other name is looked up as a continuous colorscale ("Viridis",
    "Spectral", ...) and sampled evenly.

    Raises
    ------
    ValueError for a non-positive size or unknown palette name.
    """
    if size <= 0:
        raise ValueError(f"Palette size must be positive, got {size}")

    qualitative = getattr(pcolors.qualitative, name, None)
    if isinstance(qualitative, list):
        colors = [qualitative[i % len(qualitative)] for i in range(size)]
        return [_to_hex(c) for c in colors]

    try:
        scale = pcolors.get_colorscale(name)
    except Exception as e:
        raise ValueError(f"Unknown palette '{name}': {e}") from e

    points = [0.5] if size == 1 else [i / (size - 1) for i in range(size)]
    return [_to_hex(c) for c in pcolors.sample_colorscale(scale, points)]


def _color_map(agg: pd.DataFrame, palette: list[str]) -> dict:
    labels = agg.drop_duplicates("topic").sort_values("topic")["label"].tolist()
    return {label: palette[i % len(palette)] for i, label in enumerate(labels)}


def _doc_counts(agg: pd.DataFrame, doc_counts) -> pd.Series:
    decades = sorted(agg["decade"].unique())
    if doc_counts is None:
        return pd.Series("n/a", index=decades)
    if isinstance(doc_counts, pd.DataFrame):
        doc_counts = doc_counts.set_index("decade")["documents"]
    return doc_counts.reindex(decades)


# -------------------------------------------------------
# STATIC CHART
# -------------------------------------------------------
def plot_stacked_bar_static(agg: pd.DataFrame, path: str, palette: list[str]) -> str:
    """Save a stacked bar chart of topic proportions per decade as PNG."""
    wide = proportions_wide(agg)
    colors = _color_map(agg, palette)

    fig, ax = plt.subplots(figsize=(12, 7))
    wide.plot.bar(
        stacked=True,
        ax=ax,
        width=0.85,
        color=[colors[c] for c in wide.columns],
        edgecolor="none",
    )
    ax.set_xlabel("Decade")
    ax.set_ylabel("Mean topic proportion")
    ax.set_title("Topics by decade")
    ax.set_ylim(0, 1)
    ax.legend(
        title="Topic",
        bbox_to_anchor=(1.02, 1),
        loc="upper left",
        fontsize="small",
        frameon=False,
    )
    fig.tight_layout()

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(path, dpi=150)
    plt.close(fig)

    logger.info(f"Saved static stacked bar chart → {path}")
    return path


# -------------------------------------------------------
# INTERACTIVE CHARTS
# -------------------------------------------------------
def plot_stacked_bar(
    agg: pd.DataFrame,
    palette: list[str],
    doc_counts=None,
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> go.Figure:
    """Interactive stacked bar chart, one trace per topic."""
    wide = proportions_wide(agg)
    colors = _color_map(agg, palette)
    counts = _doc_counts(agg, doc_counts)

    fig = go.Figure()
    for label in wide.columns:
        values = wide[label]
        fig.add_trace(
            go.Bar(
                x=wide.index,
                y=values,
                name=label,
                marker_color=colors[label],
                customdata=list(zip([label] * len(values), values, counts)),
                hovertemplate=HOVER_TEMPLATE,
            )
        )

    fig.update_layout(
        barmode="stack",
        title="Topics by decade",
        xaxis_title="Decade",
        yaxis_title="Mean topic proportion",
        yaxis_range=[0, 1],
        legend_title_text="Topic",
        width=width,
        height=height,
        template="plotly_white",
    )
    return fig


def streamgraph_layers(wide: pd.DataFrame) -> tuple[pd.Series, pd.DataFrame]:
    """
    Baseline and cumulative upper edges for a streamgraph.

    The baseline is -total/2 per decade (silhouette offset), so the
    stream is symmetric around zero. Returns (baseline, upper) where
    upper[label] is the top edge of that topic's band.
    """
    total = wide.sum(axis=1)
    baseline = -total / 2
    upper = wide.cumsum(axis=1).add(baseline, axis=0)
    return baseline, upper


def plot_streamgraph(
    agg: pd.DataFrame,
    palette: list[str],
    doc_counts=None,
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> go.Figure:
    """Interactive streamgraph: smoothed stacked areas around a centred baseline."""
    wide = proportions_wide(agg)
    colors = _color_map(agg, palette)
    counts = _doc_counts(agg, doc_counts)
    baseline, upper = streamgraph_layers(wide)

    fig = go.Figure()

    # invisible trace the first band fills down to
    fig.add_trace(
        go.Scatter(
            x=wide.index,
            y=baseline,
            mode="lines",
            line=dict(width=0, shape="spline"),
            hoverinfo="skip",
            showlegend=False,
        )
    )

    for label in wide.columns:
        values = wide[label]
        fig.add_trace(
            go.Scatter(
                x=wide.index,
                y=upper[label],
                name=label,
                mode="lines",
                line=dict(width=0.5, color=colors[label], shape="spline"),
                fill="tonexty",
                fillcolor=colors[label],
                customdata=list(zip([label] * len(values), values, counts)),
                hovertemplate=HOVER_TEMPLATE,
            )
        )

    fig.update_layout(
        title="Topic streamgraph",
        xaxis_title="Decade",
        yaxis=dict(showticklabels=False, zeroline=False, showgrid=False),
        legend_title_text="Topic",
        hovermode="closest",
        width=width,
        height=height,
        template="plotly_white",
    )
    return fig


# -------------------------------------------------------
# EXPORT
# -------------------------------------------------------
def save_html(fig: go.Figure, path: str) -> str:
    """Write a standalone HTML file (plotly.js embedded)."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fig.write_html(path, include_plotlyjs=True, full_html=True)
    logger.info(f"Saved interactive chart → {path}")
    return path


def iframe_snippet(path: str, width: int = CHART_WIDTH, height: int = CHART_HEIGHT) -> str:
    """HTML iframe that embeds an exported chart (e.g. in a notebook or report)."""
    src = html.escape(path.replace(os.sep, "/"), quote=True)
    return (
        f'<iframe src="{src}" width="{width}" height="{height}" '
        f'frameborder="0" scrolling="no"></iframe>'
    )


def render_all(
    agg: pd.DataFrame,
    vis_dir: str,
    palette: list[str],
    doc_counts=None,
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> dict:
    """Render the static bar chart, interactive bar chart and streamgraph."""
    logger.info("Generating topic charts...")

    outputs = {
        "static_bar": plot_stacked_bar_static(
            agg, os.path.join(vis_dir, "topics_by_decade.png"), palette
        ),
        "stacked_bar": save_html(
            plot_stacked_bar(agg, palette, doc_counts, width, height),
            os.path.join(vis_dir, "topics_by_decade.html"),
        ),
        "streamgraph": save_html(
            plot_streamgraph(agg, palette, doc_counts, width, height),
            os.path.join(vis_dir, "topic_streamgraph.html"),
        ),
    }

    logger.info("All charts saved successfully.")
    return outputs


# -------------------------------------------------------
# MAIN
# -------------------------------------------------------
if __name__ == "__main__":
    agg_csv = os.path.join(TOPIC_DIR, "topics_per_decade.csv")
    counts_csv = os.path.join(TOPIC_DIR, "documents_per_decade.csv")

    logger.info(f"Loading decade proportions from {agg_csv}")
    try:
        agg = pd.read_csv(agg_csv)
    except Exception as e:
        logger.error(f"Failed to load {agg_csv}. Ensure the LDA pipeline completed.\n{e}")
        raise

    doc_counts = pd.read_csv(counts_csv) if os.path.exists(counts_csv) else None
    palette = build_palette(PALETTE_NAME, agg["topic"].nunique())
    render_all(agg, VIS_DIR, palette, doc_counts)
