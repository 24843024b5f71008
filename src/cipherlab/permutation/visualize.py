"""Text and matplotlib views of keys and block mappings."""

from typing import List, NamedTuple, Optional, Sequence, Tuple

from cipherlab.permutation.key import invert_permutation
from cipherlab.permutation.permute import KeyLike


class AnimationStep(NamedTuple):
    """One character placement of a forward block permutation."""
    position: int       # 1-based source position
    char: str
    destination: int    # 1-based output position


def _diagram_rows(values: Sequence[int], width: int) -> List[str]:
    n = len(values)
    top = "".join(str(i).rjust(width) for i in range(1, n + 1))
    arrows = "".join("↓".rjust(width) for _ in range(n))
    bottom = "".join(str(v).rjust(width) for v in values)
    return [top, arrows, bottom]


def render_key_diagram(perm: KeyLike) -> str:
    """Render forward and inverse position diagrams for a key.

    Each diagram is three rows: positions 1..n, arrows, and the values the
    positions map to.
    """
    values = list(perm)
    inverse = invert_permutation(values)
    width = len(str(len(values))) + 2
    lines = ["Forward"]
    lines.extend(_diagram_rows(values, width))
    lines.append("Inverse")
    lines.extend(_diagram_rows(inverse, width))
    return "\n".join(lines)


def mapping_table(before: str, after: str, direction: str = "forward") -> List[Tuple[int, str, str]]:
    """Build the per-position mapping rows for one block.

    Args:
        before: Block before the operation.
        after: Block after the operation.
        direction: "forward" puts `before` in the first column, "reverse"
            puts `after` first.

    Returns:
        Rows of (1-based index, first column char, second column char). The
        shorter block is filled with empty strings.
    """
    if direction not in ("forward", "reverse"):
        raise ValueError(f"Unknown direction: {direction}")
    rows = []
    for i in range(max(len(before), len(after))):
        a = before[i] if i < len(before) else ""
        b = after[i] if i < len(after) else ""
        if direction == "reverse":
            a, b = b, a
        rows.append((i + 1, a, b))
    return rows


def format_mapping_table(rows: List[Tuple[int, str, str]], headers: Tuple[str, str, str] = ("#", "in", "out")) -> str:
    width = max([len(h) for h in headers] + [len(str(r[0])) for r in rows])
    lines = ["  ".join(h.ljust(width) for h in headers)]
    for index, a, b in rows:
        lines.append("  ".join(s.ljust(width) for s in (str(index), a, b)))
    return "\n".join(lines)


def animation_steps(block: str, perm: KeyLike) -> List[AnimationStep]:
    """Step-by-step placement of each character of a full block.

    Raises:
        ValueError: If the block is shorter than the key.
    """
    n = len(perm)
    if len(block) < n:
        raise ValueError(f"Block needs at least {n} characters for a demo, got {len(block)}")
    return [AnimationStep(i + 1, block[i], perm[i]) for i in range(n)]


def plot_key(perm: KeyLike, path: str, title: Optional[str] = None) -> None:
    """Save a figure with one arrow per position, top row to bottom row.

    Args:
        perm: Permutation key.
        path: Output image path (format from the extension).
        title: Figure title, defaults to the pattern string.
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import numpy as np

    values = np.asarray(list(perm))
    n = len(values)
    sources = np.arange(1, n + 1)

    fig, ax = plt.subplots(figsize=(max(4, 0.6 * n), 3))
    for src, dst in zip(sources, values):
        ax.annotate(
            "", xy=(dst, 0), xytext=(src, 1),
            arrowprops=dict(arrowstyle="->", color="tab:blue", lw=1.2),
        )
    ax.scatter(sources, np.ones(n), s=250, color="white", edgecolors="black", zorder=3)
    ax.scatter(sources, np.zeros(n), s=250, color="white", edgecolors="black", zorder=3)
    for i in sources:
        ax.text(i, 1, str(i), ha="center", va="center", zorder=4)
        ax.text(i, 0, str(i), ha="center", va="center", zorder=4)

    ax.set_xlim(0.5, n + 0.5)
    ax.set_ylim(-0.5, 1.5)
    ax.set_yticks([0, 1])
    ax.set_yticklabels(["output", "input"])
    ax.set_xticks([])
    ax.set_title(title or "-".join(str(int(v)) for v in values))
    for spine in ax.spines.values():
        spine.set_visible(False)

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
