"""Matplotlib pictures of spanning forests and batch weight charts."""
import os
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import networkx as nx
import imageio.v2 as imageio

from graph_utils import Graph
from kruskal import Forest

MAX_DRAW_NODES = 50
LAYOUT_SEED = 42


def _layout(graph: Graph):
    G = nx.Graph()
    G.add_nodes_from(range(graph.num_nodes))
    G.add_edges_from((e.v, e.w) for e in graph.edges)
    k = 1 / graph.num_nodes**0.5 if graph.num_nodes else None
    return G, nx.spring_layout(G, seed=LAYOUT_SEED, k=k, iterations=50)


def _too_large(graph: Graph) -> bool:
    if graph.num_nodes > MAX_DRAW_NODES:
        print(f"[viz] Skipping drawing (n={graph.num_nodes} > {MAX_DRAW_NODES} nodes)")
        return True
    return False


def save_forest_visualization(graph: Graph, forest: Forest, path: str, title: str = 'Kruskal MST') -> Optional[str]:
    """Draw the input graph and its spanning forest side by side."""
    if _too_large(graph):
        return None
    G, pos = _layout(graph)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(20, 9))

    ax1.set_title(f'Original Graph\n{graph.num_nodes} nodes, {graph.num_edges} edges',
                  fontsize=14, fontweight='bold', pad=15)
    nx.draw_networkx_nodes(G, pos, node_color='lightblue', node_size=500, alpha=0.9,
                           linewidths=2, edgecolors='darkblue', ax=ax1)
    nx.draw_networkx_edges(G, pos, alpha=0.3, width=1.5, edge_color='gray', ax=ax1)
    nx.draw_networkx_labels(G, pos, font_size=9, font_weight='bold', ax=ax1)
    ax1.axis('off')

    ax2.set_title(f'Minimum Spanning Forest\n{forest.size} edges, '
                  f'{forest.num_components} component(s), weight = {forest.weight:.2f}',
                  fontsize=14, fontweight='bold', pad=15)
    nx.draw_networkx_nodes(G, pos, node_color='lightgreen', node_size=500, alpha=0.9,
                           linewidths=2, edgecolors='darkgreen', ax=ax2)
    nx.draw_networkx_edges(G, pos, edgelist=[(e.v, e.w) for e in forest.edges],
                           edge_color='red', width=3, alpha=0.8, ax=ax2)
    nx.draw_networkx_labels(G, pos, font_size=9, font_weight='bold', ax=ax2)
    # parallel edges share a label slot; the forest holds at most one per pair
    labels = {(e.v, e.w): f'{e.weight:.1f}' for e in forest.edges}
    nx.draw_networkx_edge_labels(G, pos, labels, font_size=7,
                                 bbox=dict(boxstyle='round,pad=0.2', facecolor='yellow', alpha=0.7),
                                 ax=ax2)
    ax2.axis('off')

    fig.suptitle(title, fontsize=16, fontweight='bold', y=0.98)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches='tight', facecolor='white', edgecolor='none')
    plt.close(fig)
    print(f"[viz] Forest visualization saved to: {path}")
    return path


def save_forest_animation(graph: Graph, forest: Forest, out_dir: str,
                          title: str = 'Kruskal MST', max_frames: Optional[int] = None) -> List[str]:
    """Save one frame per accepted edge, in acceptance order.

    With ``max_frames`` the acceptance steps are sampled evenly, always keeping
    the last one.
    """
    if _too_large(graph):
        return []
    os.makedirs(out_dir, exist_ok=True)
    G, pos = _layout(graph)

    steps = list(range(1, forest.size + 1))
    if max_frames and max_frames > 0 and len(steps) > max_frames:
        stride = (len(steps) - 1) / max(max_frames - 1, 1)
        steps = sorted({steps[round(k * stride)] for k in range(max_frames)})

    fig, ax = plt.subplots(figsize=(6, 6))
    frame_paths = []
    for step in steps:
        accepted = forest.edges[:step]
        newest = accepted[-1]
        ax.clear()
        ax.set_title(f"{title} (edge {step}/{forest.size})")
        ax.set_axis_off()
        nx.draw_networkx_edges(G, pos, alpha=0.3, width=0.8, edge_color='lightgray', ax=ax)
        nx.draw_networkx_edges(G, pos, edgelist=[(e.v, e.w) for e in accepted[:-1]],
                               edge_color='tab:blue', width=1.5, ax=ax)
        nx.draw_networkx_edges(G, pos, edgelist=[(newest.v, newest.w)],
                               edge_color='tab:red', width=3.0, ax=ax)
        nx.draw_networkx_nodes(G, pos, node_size=80, node_color='black', ax=ax)
        running = sum(e.weight for e in accepted)
        ax.text(0.02, 0.98,
                f"added {newest}\nforest edges {step}\nweight {running:.2f}",
                transform=ax.transAxes, va='top', ha='left', fontsize=7,
                bbox=dict(boxstyle='round', fc='white', alpha=0.75))
        frame_path = os.path.join(out_dir, f"frame_{step:03d}.png")
        fig.savefig(frame_path, dpi=120, bbox_inches='tight')
        frame_paths.append(frame_path)
    plt.close(fig)
    return frame_paths


def build_gif(frame_paths: List[str], gif_path: str, duration: float = 0.6) -> Optional[str]:
    """Build a GIF from saved frame image paths."""
    if not frame_paths:
        return None
    images = [imageio.imread(p) for p in frame_paths]
    fps = 1.0 / duration if duration > 0 else 1.0
    imageio.mimsave(gif_path, images, fps=fps, loop=0)
    return gif_path


def save_weight_chart(weights: Sequence[float], labels: Sequence[str], out_dir: str) -> Optional[str]:
    """Bar chart of forest weights across the batch with mean and median lines."""
    if not weights:
        return None
    from batch_stats import summarize_weights
    stats = summarize_weights(weights)
    fig, ax = plt.subplots(figsize=(max(6, 0.6 * len(weights)), 4))
    xs = list(range(len(weights)))
    ax.bar(xs, weights, color='#1f77b4')
    ax.axhline(stats.mean, color='#d62728', linestyle='--', label=f'mean {stats.mean:.2f}')
    ax.axhline(stats.median, color='#2ca02c', linestyle=':', label=f'median {stats.median:.2f}')
    ax.set_xticks(xs)
    ax.set_xticklabels(labels, rotation=45, ha='right', fontsize=8)
    ax.set_ylabel('Forest weight')
    ax.set_title('Minimum spanning forest weights')
    ax.legend()
    path = os.path.join(out_dir, 'weights.png')
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path
