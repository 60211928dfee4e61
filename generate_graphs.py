import argparse

import matplotlib.pyplot as plt

from simulator import (ALGORITHMS, DEFAULT_TRACES, VirtualMemorySimulator,
                       WorkingSetUnsatisfiableError, load_workloads)

METRICS = ['page_faults', 'loads', 'saves']
TITLES = ['Page Faults', 'Loads From Disk', 'Saves To Disk']


def collect_results(trace_files, frame_counts, q, ws_size, max_num_of_references=None):
    results = {algorithm: {} for algorithm in ALGORITHMS}

    for algorithm in ALGORITHMS:
        for num_frames in frame_counts:
            simulator = VirtualMemorySimulator(
                algorithm=algorithm, num_frames=num_frames, q=q,
                ws_size=ws_size if algorithm == 'WS' else None,
                max_num_of_references=max_num_of_references)
            try:
                stats = simulator.run_simulation(load_workloads(trace_files))
            except WorkingSetUnsatisfiableError:
                results[algorithm][num_frames] = None
                continue
            results[algorithm][num_frames] = {
                'page_faults': sum(stats.page_faults.values()),
                'loads': stats.load_count,
                'saves': stats.save_count
            }

    return results


def plot_results(results, output='algorithm_comparison.png'):
    fig, axes = plt.subplots(1, len(METRICS), figsize=(15, 5))
    fig.suptitle('LRU vs Working Set Replacement', fontsize=14, fontweight='bold')

    for ax, metric, title in zip(axes, METRICS, TITLES):
        for algorithm, points in results.items():
            # Unsatisfiable working set runs have no point to plot
            frames = [n for n, r in sorted(points.items()) if r is not None]
            values = [points[n][metric] for n in frames]
            ax.plot(frames, values, marker='o', label=algorithm)

        ax.set_title(title)
        ax.set_xlabel('Number of frames')
        ax.grid(alpha=0.3)
        ax.legend()

    plt.tight_layout()
    fig.savefig(output, dpi=300, bbox_inches='tight')
    plt.close(fig)
    return output


def main(argv=None):
    parser = argparse.ArgumentParser(description='Compare LRU and WS over a range of frame counts')
    parser.add_argument('--trace', action='append', dest='traces', metavar='PATH',
                        help='trace file of one workload, repeat for each (default: bzip.trace gcc.trace)')
    parser.add_argument('--frames', nargs='+', type=int, default=[8, 16, 32, 64, 128])
    parser.add_argument('--q', type=int, default=10)
    parser.add_argument('--ws-size', type=int, default=4)
    parser.add_argument('--max-references', type=int, default=None)
    parser.add_argument('--output', default='algorithm_comparison.png')
    args = parser.parse_args(argv)
    if args.traces is None:
        args.traces = DEFAULT_TRACES

    print("Running simulations...")
    results = collect_results(args.traces, args.frames, args.q, args.ws_size,
                              args.max_references)
    output = plot_results(results, args.output)
    print(f"\nGraph saved as '{output}'")


if __name__ == '__main__':
    main()
