import os

import pandas as pd
import pytest

from topicstream.nlp.topic_visualizations import (
    build_palette,
    iframe_snippet,
    plot_stacked_bar,
    plot_stacked_bar_static,
    plot_streamgraph,
    render_all,
    save_html,
    streamgraph_layers,
)


@pytest.fixture
def agg():
    return pd.DataFrame(
        {
            "decade": [1740, 1740, 1750, 1750],
            "topic": [0, 1, 0, 1],
            "label": ["ship, cargo", "god, grace", "ship, cargo", "god, grace"],
            "proportion": [0.4, 0.6, 0.5, 0.5],
        }
    )


@pytest.fixture
def doc_counts():
    return pd.DataFrame({"decade": [1740, 1750], "documents": [2, 3], "percentage": [40.0, 60.0]})


def test_qualitative_palette_cycles():
    palette = build_palette("Set3", 15)

    assert len(palette) == 15
    assert all(c.startswith("#") and len(c) == 7 for c in palette)
    assert palette[12] == palette[0]


def test_continuous_palette_is_sampled():
    palette = build_palette("Viridis", 5)

    assert len(palette) == 5
    assert palette[0] == "#440154"
    assert len(set(palette)) == 5


def test_palette_errors():
    with pytest.raises(ValueError):
        build_palette("Set3", 0)
    with pytest.raises(ValueError, match="Unknown palette"):
        build_palette("NotARealPalette", 3)


def test_streamgraph_layers_are_centred(agg):
    wide = agg.pivot(index="decade", columns="label", values="proportion")[
        ["ship, cargo", "god, grace"]
    ]

    baseline, upper = streamgraph_layers(wide)

    assert baseline.tolist() == pytest.approx([-0.5, -0.5])
    assert upper["god, grace"].tolist() == pytest.approx([0.5, 0.5])
    assert upper["ship, cargo"].tolist() == pytest.approx([-0.1, 0.0])


def test_stacked_bar_has_one_trace_per_topic(agg, doc_counts):
    fig = plot_stacked_bar(agg, build_palette("Set3", 2), doc_counts)

    assert fig.layout.barmode == "stack"
    assert [t.name for t in fig.data] == ["ship, cargo", "god, grace"]
    assert "Proportion" in fig.data[0].hovertemplate
    assert fig.data[0].customdata[0][2] == 2


def test_streamgraph_traces(agg):
    fig = plot_streamgraph(agg, build_palette("Set3", 2))

    assert len(fig.data) == 3
    assert fig.data[0].showlegend is False
    assert all(t.fill == "tonexty" for t in fig.data[1:])
    assert fig.data[1].line.shape == "spline"


def test_save_html_and_iframe(agg, tmp_path):
    path = save_html(plot_streamgraph(agg, build_palette("Set3", 2)), str(tmp_path / "out" / "s.html"))

    assert os.path.exists(path)
    with open(path, encoding="utf-8") as f:
        assert "plotly" in f.read()

    snippet = iframe_snippet("visuals/s.html", width=800, height=400)
    assert snippet.startswith('<iframe src="visuals/s.html"')
    assert 'width="800"' in snippet and 'height="400"' in snippet


def test_static_chart_written(agg, tmp_path):
    path = plot_stacked_bar_static(agg, str(tmp_path / "bar.png"), build_palette("Set3", 2))

    assert os.path.getsize(path) > 0


def test_render_all(agg, doc_counts, tmp_path):
    outputs = render_all(agg, str(tmp_path), build_palette("Pastel", 2), doc_counts)

    assert set(outputs) == {"static_bar", "stacked_bar", "streamgraph"}
    assert all(os.path.exists(p) for p in outputs.values())
