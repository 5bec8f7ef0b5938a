import math
from typing import Dict, Iterable, List, Tuple

import networkx as nx
from pyvis.network import Network

from talk_table_match.matcher import attribute_distance
from talk_table_match.models import Layout, SEAT_POSITIONS

# ---------------------------
# Public API
# ---------------------------

def generate_seating_map(
    result: Layout,
    respondents: Iterable,
    canvas_size: Tuple[int, int] = (1600, 1000),
) -> str:
    """
    Build an interactive seating visualization.

    Parameters:
      result: Layout from ``talk_table_match.layout``, overrides applied or not.
      respondents: iterable of Respondent used to color partner edges.
      canvas_size: width, height in pixels for layout scaling.

    Returns:
      HTML string with embedded network.
    """
    by_id = {str(r.id): r for r in respondents}

    width, height = canvas_size
    table_nos = [t.table_no for t in result.tables]
    centers = _compute_table_centers(table_nos, width, height)

    G = nx.Graph()

    palette = [
        "#FFB347", "#77DD77", "#AEC6CF", "#C23B22", "#F49AC2", "#B39EB5",
        "#03C03C", "#779ECB", "#966FD6", "#FFD700", "#FF6961", "#CB99C9",
    ]

    # Nodes
    for i, table in enumerate(result.tables):
        cx, cy = centers[table.table_no]
        for seat in table.occupied:
            x, y = _seat_offset(cx, cy, seat.pos)
            G.add_node(
                seat.id,
                label=seat.name,
                title=_node_tooltip(seat.name, table.table_no, seat.pos, seat.block_type, seat.summary),
                color=palette[i % len(palette)],
                x=x,
                y=y,
                physics=False,
                borderWidth=4 if seat.block_type == "manual" else 2,
                shape="dot",
                size=18,
            )

    # Edges between partners of the same block
    for table in result.tables:
        for seat in table.occupied:
            for other_id, _ in seat.group_members:
                if other_id == seat.id or other_id not in G or G.has_edge(seat.id, other_id):
                    continue
                a, b = by_id.get(seat.id), by_id.get(other_id)
                d = attribute_distance(a, b) if a is not None and b is not None else None
                G.add_edge(seat.id, other_id, color=_edge_color(d), width=2, label=_edge_label(d))

    net = Network(height="700px", width="100%", bgcolor="#111111", font_color="#EEEEEE")
    net.toggle_physics(False)  # positions are fixed
    net.from_nx(G)

    return _inject_legend_html(net.generate_html())

# ---------------------------
# Internals
# ---------------------------

def _compute_table_centers(tables: List[int], width: int, height: int) -> Dict[int, Tuple[int, int]]:
    """
    Place table centers on a grid inside the canvas area.
    """
    if not tables:
        return {}
    n = len(tables)
    cols = max(1, int(math.ceil(math.sqrt(n))))
    rows = int(math.ceil(n / cols))
    margin_x = 120
    margin_y = 120
    usable_w = max(1, width - 2 * margin_x)
    usable_h = max(1, height - 2 * margin_y)
    step_x = usable_w // max(1, cols)
    step_y = usable_h // max(1, rows)

    centers: Dict[int, Tuple[int, int]] = {}
    for idx, table_no in enumerate(tables):
        r, c = divmod(idx, cols)
        centers[table_no] = (margin_x + c * step_x + step_x // 2, margin_y + r * step_y + step_y // 2)
    return centers


def _seat_offset(cx: int, cy: int, pos: str, gap: int = 40) -> Tuple[int, int]:
    row, col = divmod(SEAT_POSITIONS.index(pos), 2)
    return cx + (gap if col else -gap), cy + (gap if row else -gap)


def _edge_color(distance) -> str:
    if distance is None:
        return "#A9A9A9"
    return ("#3CB371", "#FFD700", "#FF6B6B")[distance]


def _edge_label(distance) -> str:
    return "manual" if distance is None else f"distance {distance}"


def _node_tooltip(name: str, table_no: int, pos: str, block_type: str, summary: str) -> str:
    return (
        f"<b>{name}</b><br>"
        f"Table: {table_no}<br>"
        f"Seat: {pos}<br>"
        f"Block: {block_type}<br>"
        f"{summary}"
    )


def _inject_legend_html(page: str) -> str:
    css = """
    <style>
    .legend-box{
      position:absolute;right:12px;bottom:12px;
      background:#222;color:#eee;border:1px solid #444;border-radius:8px;
      padding:8px 12px;font-family:system-ui, -apple-system, Segoe UI, Roboto, Arial;font-size:12px;
      z-index:10;
    }
    .legend-swatch{display:inline-block;width:12px;height:12px;margin-right:6px;vertical-align:middle;border:1px solid #444;}
    </style>
    """
    html = f"""
    {css}
    <div class="legend-box">
      <div><span class="legend-swatch" style="background:#3CB371"></span>same answers</div>
      <div><span class="legend-swatch" style="background:#FFD700"></span>one answer differs</div>
      <div><span class="legend-swatch" style="background:#FF6B6B"></span>both answers differ</div>
      <div style="margin-top:6px;">node color: table</div>
      <div>thick border: manual seat</div>
    </div>
    """
    if "</body>" in page:
        return page.replace("</body>", html + "</body>", 1)
    return page + html
