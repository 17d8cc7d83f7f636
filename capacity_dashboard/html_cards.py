"""
HTML snippets for the Streamlit page's custom cards.

Facility names come straight from the uploaded file, so every value taken
from a report is escaped before it is placed in markup.
"""

import html


def watchlist_item_html(item, color: str) -> str:
    """Render one watchlist row as a bordered card."""
    name = html.escape(str(item["facility_name"]))
    tier = html.escape(str(item["tier"]))
    return (
        f"<div style='border-left: 3px solid {color}; padding: 4px 8px; margin: 4px 0;'>"
        f"<b>{name}</b> "
        f"<span style='color:{color}; font-size:12px;'>{tier}</span><br>"
        f"<span style='font-size:12px; color:#888;'>Occupancy: {item['occupied']} / "
        f"{item['total']} · {item['utilization_pct']:.1f}%</span></div>"
    )
