"""Standalone HTML page for a rendered graph."""

from __future__ import annotations

import html
import json

from .correspondence import Correspondence


def wrap_html(svg: str, *, title: str, correspondence: Correspondence | None = None) -> str:
    """Wrap SVG in an HTML page with pan/zoom, Center/Fit buttons and click reporting.

    Clicking a node or edge shows the graph's own id for it, looked up through
    the correspondence embedded in the page.
    """
    t = html.escape(title, quote=True)
    ids = json.dumps((correspondence or Correspondence()).to_dict(), sort_keys=True).replace("</", "<\\/")
    return (
        "<!doctype html>\n"
        "<html>\n"
        "<head>\n"
        f"  <meta charset=\"utf-8\" />\n  <title>{t}</title>\n"
        "  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />\n"
        "  <style>\n"
        "    html, body { height: 100%; }\n"
        "    body { margin: 0; background: #ffffff; color: #1b1f2a; font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial; }\n"
        "    .wrap { padding: 12px; height: 100vh; box-sizing: border-box; display: flex; flex-direction: column; }\n"
        "    .toolbar { display: flex; gap: 8px; align-items: center; margin: 0 0 10px 0; }\n"
        "    .btn { background: #f4f5f7; color: #1b1f2a; border: 1px solid #c9ced8; border-radius: 8px; padding: 6px 10px; cursor: pointer; }\n"
        "    .btn:hover { border-color: #5b6782; }\n"
        "    .hint { color: #6b7280; font-size: 12px; }\n"
        "    .selected { margin-left: auto; font-size: 13px; }\n"
        "    .viewport { border: 1px solid #c9ced8; border-radius: 10px; overflow: hidden; flex: 1; min-height: 0; }\n"
        "    svg { width: 100%; height: 100%; display: block; touch-action: none; user-select: none; }\n"
        "    g.node, g.edge { cursor: pointer; }\n"
        "  </style>\n"
        "</head>\n"
        "<body>\n"
        "  <div class=\"wrap\">\n"
        "    <div class=\"toolbar\">\n"
        "      <button class=\"btn\" id=\"fitBtn\" type=\"button\">Fit</button>\n"
        "      <button class=\"btn\" id=\"centerBtn\" type=\"button\">Center</button>\n"
        "      <button class=\"btn\" id=\"zoomInBtn\" type=\"button\">Zoom +</button>\n"
        "      <button class=\"btn\" id=\"zoomOutBtn\" type=\"button\">Zoom -</button>\n"
        "      <span class=\"hint\">Drag to pan • Scroll to zoom • Click a node or edge</span>\n"
        "      <span class=\"selected\" id=\"selected\">Nothing selected</span>\n"
        "    </div>\n"
        "    <div class=\"viewport\" id=\"viewport\">\n"
        f"{svg}\n"
        "    </div>\n"
        "  </div>\n"
        f"  <script id=\"vizgraph-ids\" type=\"application/json\">{ids}</script>\n"
        "  <script>\n"
        "    (function () {\n"
        "      const viewportEl = document.getElementById('viewport');\n"
        "      const svg = viewportEl.querySelector('svg');\n"
        "      if (!svg) return;\n"
        "      if (!svg.getAttribute('viewBox')) {\n"
        "        const w = parseFloat(svg.getAttribute('width')) || 1000;\n"
        "        const h = parseFloat(svg.getAttribute('height')) || 800;\n"
        "        svg.setAttribute('viewBox', `0 0 ${w} ${h}`);\n"
        "      }\n"
        "\n"
        "      const vb = svg.viewBox.baseVal;\n"
        "      const initial = { x: vb.x, y: vb.y, width: vb.width, height: vb.height };\n"
        "\n"
        "      const zoomAt = (clientX, clientY, factor) => {\n"
        "        const rect = svg.getBoundingClientRect();\n"
        "        const px = (clientX - rect.left) / rect.width;\n"
        "        const py = (clientY - rect.top) / rect.height;\n"
        "        const newW = vb.width / factor;\n"
        "        const newH = vb.height / factor;\n"
        "        vb.x += (vb.width - newW) * px;\n"
        "        vb.y += (vb.height - newH) * py;\n"
        "        vb.width = newW;\n"
        "        vb.height = newH;\n"
        "      };\n"
        "\n"
        "      let isPanning = false;\n"
        "      let moved = false;\n"
        "      let start = { x: 0, y: 0, vbX: 0, vbY: 0 };\n"
        "\n"
        "      svg.addEventListener('pointerdown', (e) => {\n"
        "        isPanning = true;\n"
        "        moved = false;\n"
        "        start = { x: e.clientX, y: e.clientY, vbX: vb.x, vbY: vb.y };\n"
        "      });\n"
        "      svg.addEventListener('pointerup', () => { isPanning = false; });\n"
        "      svg.addEventListener('pointercancel', () => { isPanning = false; });\n"
        "      svg.addEventListener('pointermove', (e) => {\n"
        "        if (!isPanning) return;\n"
        "        if (Math.abs(e.clientX - start.x) + Math.abs(e.clientY - start.y) > 3) moved = true;\n"
        "        const rect = svg.getBoundingClientRect();\n"
        "        vb.x = start.vbX - (e.clientX - start.x) * (vb.width / rect.width);\n"
        "        vb.y = start.vbY - (e.clientY - start.y) * (vb.height / rect.height);\n"
        "      });\n"
        "\n"
        "      svg.addEventListener('wheel', (e) => {\n"
        "        e.preventDefault();\n"
        "        zoomAt(e.clientX, e.clientY, e.deltaY > 0 ? 1 / 1.15 : 1.15);\n"
        "      }, { passive: false });\n"
        "\n"
        "      const fit = () => {\n"
        "        vb.x = initial.x;\n"
        "        vb.y = initial.y;\n"
        "        vb.width = initial.width;\n"
        "        vb.height = initial.height;\n"
        "      };\n"
        "      const center = () => {\n"
        "        vb.x = initial.x + (initial.width - vb.width) / 2;\n"
        "        vb.y = initial.y + (initial.height - vb.height) / 2;\n"
        "      };\n"
        "      const middle = () => {\n"
        "        const rect = svg.getBoundingClientRect();\n"
        "        return [rect.left + rect.width / 2, rect.top + rect.height / 2];\n"
        "      };\n"
        "      document.getElementById('fitBtn')?.addEventListener('click', fit);\n"
        "      document.getElementById('centerBtn')?.addEventListener('click', center);\n"
        "      document.getElementById('zoomInBtn')?.addEventListener('click', () => zoomAt(...middle(), 1.2));\n"
        "      document.getElementById('zoomOutBtn')?.addEventListener('click', () => zoomAt(...middle(), 1 / 1.2));\n"
        "\n"
        "      const ids = JSON.parse(document.getElementById('vizgraph-ids').textContent);\n"
        "      const selectedEl = document.getElementById('selected');\n"
        "      const route = (map, kind) => {\n"
        "        Object.keys(map).forEach((visualId) => {\n"
        "          const el = document.getElementById(visualId);\n"
        "          if (!el) return;\n"
        "          el.addEventListener('click', (e) => {\n"
        "            if (moved) return;\n"
        "            e.stopPropagation();\n"
        "            selectedEl.textContent = `${kind}: ${map[visualId]}`;\n"
        "            svg.dispatchEvent(new CustomEvent('vizgraph:click', { detail: { kind, id: map[visualId] } }));\n"
        "          });\n"
        "        });\n"
        "      };\n"
        "      route(ids.nodes, 'node');\n"
        "      route(ids.edges, 'edge');\n"
        "    })();\n"
        "  </script>\n"
        "</body>\n"
        "</html>\n"
    )
