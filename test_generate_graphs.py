import matplotlib

matplotlib.use('Agg')

from generate_graphs import collect_results, plot_results  # noqa: E402


def write_traces(tmp_path):
    a = tmp_path / 'a.trace'
    b = tmp_path / 'b.trace'
    a.write_text("00000000 R\n00001000 W\n")
    b.write_text("00000000 R\n00001000 R\n")
    return [str(a), str(b)]


def test_collect_results(tmp_path):
    results = collect_results(write_traces(tmp_path), [1, 4], q=2, ws_size=2)

    assert results['LRU'][4] == {'page_faults': 4, 'loads': 4, 'saves': 0}
    assert results['LRU'][1] == {'page_faults': 4, 'loads': 4, 'saves': 1}
    assert results['WS'][4] == {'page_faults': 4, 'loads': 4, 'saves': 0}
    # A single frame cannot hold a working set of two pages
    assert results['WS'][1] is None


def test_plot_results(tmp_path):
    results = collect_results(write_traces(tmp_path), [1, 4], q=2, ws_size=2)
    output = plot_results(results, str(tmp_path / 'comparison.png'))

    assert (tmp_path / 'comparison.png').exists()
    assert output.endswith('comparison.png')
