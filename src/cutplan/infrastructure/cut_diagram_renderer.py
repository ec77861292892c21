"""Cut diagram rendering for packed sheets.

This module provides SVG, ASCII and printable HTML renderings of sheet
layouts showing piece placements, dimensions, rotation markers and waste.
"""

from __future__ import annotations

from html import escape

from cutplan.infrastructure.bin_packing import (
    PackingResult,
    PlacedPiece,
    SheetLayout,
)

# Fill colors handed out to piece sizes in order of first appearance.
SIZE_PALETTE: tuple[str, ...] = (
    "#87CEEB",  # Sky blue
    "#90EE90",  # Light green
    "#DDA0DD",  # Plum
    "#F0E68C",  # Khaki
    "#FFB6C1",  # Light pink
    "#FFA07A",  # Light salmon
    "#FFD700",  # Gold
    "#DEB887",  # Burlywood
    "#E6E6FA",  # Lavender
    "#BC8F8F",  # Rosy brown
    "#D8BFD8",  # Thistle
    "#B0C4DE",  # Light steel blue
)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


class CutDiagramRenderer:
    """Renders cut diagrams for a packing result.

    Pieces of the same requested size share a fill color, so identical parts
    are easy to spot across sheets.

    Attributes:
        scale: Pixels per inch for SVG rendering (default 10).
        piece_fill: Fill color used when size colors are disabled.
        piece_stroke: Stroke color for piece outlines.
        waste_fill: Fill color for waste areas.
        text_color: Color for labels and dimensions.
        show_labels: Whether to write piece labels.
        use_size_colors: Whether to color pieces by requested size.
    """

    def __init__(
        self,
        scale: float = 10.0,
        piece_fill: str = "#ADD8E6",  # Light blue
        piece_stroke: str = "#000000",
        waste_fill: str = "#D3D3D3",  # Light gray
        text_color: str = "#000000",
        show_labels: bool = True,
        use_size_colors: bool = True,
    ) -> None:
        self.scale = scale
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_labels = show_labels
        self.use_size_colors = use_size_colors
        self._colors: dict[str, str] = {}

    def color_for(self, placement: PlacedPiece) -> str:
        """Return the fill color for a piece, assigning a new one per size."""
        if not self.use_size_colors:
            return self.piece_fill
        key = placement.color_key
        if key not in self._colors:
            self._colors[key] = SIZE_PALETTE[len(self._colors) % len(SIZE_PALETTE)]
        return self._colors[key]

    def render_svg(self, layout: SheetLayout, total_sheets: int = 1) -> str:
        """Generate SVG cut diagram for a single sheet.

        Args:
            layout: Sheet layout with placed pieces.
            total_sheets: Total number of sheets (for header display).

        Returns:
            SVG string representation of the layout.
        """
        sheet = layout.sheet_config
        header_height = 30

        svg_width = sheet.width * self.scale
        svg_height = sheet.height * self.scale + header_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            self._render_header(layout, total_sheets, svg_width, header_height),
            "  <!-- Sheet outline -->",
            f'  <rect x="0" y="{header_height}" '
            f'width="{svg_width}" height="{sheet.height * self.scale}" '
            f'fill="#f5deb3" stroke="{self.piece_stroke}" stroke-width="2"/>',
        ]

        waste_svg = self._render_waste_areas(layout, header_height)
        if waste_svg:
            parts.append("  <!-- Waste areas -->")
            parts.append(waste_svg)

        parts.append("  <!-- Placed pieces -->")
        for placement in layout.placements:
            parts.append(self._render_piece(placement, header_height))

        parts.append("</svg>")
        return "\n".join(parts)

    def render_all_svg(self, result: PackingResult) -> list[str]:
        """Generate SVG cut diagrams for all sheets, one string per sheet."""
        total_sheets = len(result.layouts)
        return [self.render_svg(layout, total_sheets) for layout in result.layouts]

    def _render_header(
        self,
        layout: SheetLayout,
        total_sheets: int,
        svg_width: float,
        header_height: float,
    ) -> str:
        header_text = (
            f"Sheet {layout.sheet_index + 1} of {total_sheets} - "
            f"{_plural(layout.piece_count, 'piece')} - "
            f"{layout.waste_percentage:.1f}% waste"
        )
        if layout.source == "strip":
            header_text += " (strip)"

        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{escape(header_text)}</text>'
        )

    def _render_piece(self, placement: PlacedPiece, header_height: float) -> str:
        """Render a single placed piece as SVG rect and text."""
        x = placement.x * self.scale
        y = header_height + placement.y * self.scale
        w = placement.placed_width * self.scale
        h = placement.placed_height * self.scale
        fill_color = self.color_for(placement)

        rect = (
            f'<rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill_color}" stroke="{self.piece_stroke}"/>'
        )

        font_size = min(12, min(w, h) / 4)
        if not self.show_labels or font_size < 6:
            return f"  {rect}"

        label = placement.dims_text
        if placement.rotated:
            label += " (R)"

        return "\n".join(
            [
                "  <g>",
                f"    {rect}",
                f'    <text x="{x + w / 2}" y="{y + h / 2 + font_size / 3}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size}" fill="{self.text_color}">'
                f"{escape(label)}</text>",
                "  </g>",
            ]
        )

    def _render_waste_areas(self, layout: SheetLayout, header_height: float) -> str:
        """Render waste areas as gray rectangles.

        Shades the strip below the lowest piece and the strip right of the
        rightmost piece. Gaps between pieces are not shaded.
        """
        if not layout.placements:
            return ""

        sheet = layout.sheet_config
        parts: list[str] = []

        max_y = max(p.bottom_edge for p in layout.placements)
        waste_height = sheet.height - max_y
        if waste_height > 1:
            parts.append(
                f'  <rect x="0" y="{header_height + max_y * self.scale}" '
                f'width="{sheet.width * self.scale}" '
                f'height="{waste_height * self.scale}" '
                f'fill="{self.waste_fill}" stroke="none"/>'
            )

        max_x = max(p.right_edge for p in layout.placements)
        waste_width = sheet.width - max_x
        if waste_width > 1:
            parts.append(
                f'  <rect x="{max_x * self.scale}" y="{header_height}" '
                f'width="{waste_width * self.scale}" height="{max_y * self.scale}" '
                f'fill="{self.waste_fill}" stroke="none"/>'
            )

        return "\n".join(parts)

    def render_combined_svg(self, result: PackingResult) -> str:
        """Generate single SVG with all sheets stacked vertically.

        Args:
            result: Complete packing result.

        Returns:
            Combined SVG string with all sheets.
        """
        if not result.layouts:
            return (
                '<svg width="200" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No sheets to display</text></svg>'
            )

        header_height = 30
        sheet_spacing = 20
        svg_width = max(layout.sheet_config.width for layout in result.layouts) * self.scale
        svg_height = sum(
            layout.sheet_config.height * self.scale + header_height + sheet_spacing
            for layout in result.layouts
        )

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        y_offset = 0.0
        total_sheets = len(result.layouts)

        for layout in result.layouts:
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            parts.append(f"    <!-- Sheet {layout.sheet_index + 1} -->")

            sheet_svg = self.render_svg(layout, total_sheets)
            start_idx = sheet_svg.find(">") + 1
            end_idx = sheet_svg.rfind("</svg>")
            for line in sheet_svg[start_idx:end_idx].strip().split("\n"):
                if line.strip():
                    parts.append(f"  {line}")

            parts.append("  </g>")
            y_offset += (
                layout.sheet_config.height * self.scale + header_height + sheet_spacing
            )

        parts.append("</svg>")
        return "\n".join(parts)

    def render_ascii(
        self,
        layout: SheetLayout,
        width: int = 80,
        total_sheets: int = 1,
    ) -> str:
        """Generate ASCII cut diagram for a single sheet.

        Args:
            layout: Sheet layout with placed pieces.
            width: Terminal width in characters (default 80).
            total_sheets: Total number of sheets (for header display).

        Returns:
            ASCII string representation of the layout.
        """
        sheet = layout.sheet_config

        # Reserve 2 chars for borders
        usable_width = width - 2
        scale_x = usable_width / sheet.width

        # Terminal cells are about twice as tall as they are wide
        grid_height = max(int(usable_width * sheet.height / sheet.width * 0.5), 10)
        scale_y = grid_height / sheet.height

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        for placement in layout.placements:
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        lines: list[str] = [
            f"Sheet {layout.sheet_index + 1} of {total_sheets} - "
            f"{_plural(layout.piece_count, 'piece')} - "
            f"{layout.waste_percentage:.1f}% waste",
            "+" + "-" * usable_width + "+",
        ]
        lines.extend("|" + "".join(row) + "|" for row in grid)
        lines.append("+" + "-" * usable_width + "+")
        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: PlacedPiece,
        scale_x: float,
        scale_y: float,
    ) -> None:
        """Draw a single piece outline and its size onto the ASCII grid."""
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = max(0, min(int(placement.x * scale_x), grid_width - 1))
        y1 = max(0, min(int(placement.y * scale_y), grid_height - 1))
        x2 = max(0, min(int(placement.right_edge * scale_x), grid_width - 1))
        y2 = max(0, min(int(placement.bottom_edge * scale_y), grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = "+"

        label_row = y1 + 1
        if label_row < y2:
            label = placement.dims_text.replace('"', "")
            if placement.rotated:
                label += " R"
            label = label[: max(0, x2 - x1 - 1)]
            for i, char in enumerate(label):
                grid[label_row][x1 + 1 + i] = char

    def render_all_ascii(self, result: PackingResult, width: int = 80) -> str:
        """Generate ASCII cut diagrams for all sheets plus a summary line."""
        if not result.layouts:
            return "No sheets to display."

        total_sheets = len(result.layouts)
        parts: list[str] = []
        for layout in result.layouts:
            parts.append(self.render_ascii(layout, width, total_sheets))
            parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {_plural(total_sheets, 'sheet')}, "
            f"{result.total_waste_percentage:.1f}% total waste"
        )
        return "\n".join(parts)

    def render_waste_summary(self, result: PackingResult) -> str:
        """Generate text summary of waste and sheet usage.

        Args:
            result: Complete packing result.

        Returns:
            Formatted summary string.
        """
        metrics = result.metrics
        lines: list[str] = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Total Sheets: {result.total_sheets}",
            f"Total Pieces: {metrics.total_pieces}",
            f"Total Waste: {result.total_waste_percentage:.1f}%",
            "",
            "Per-Sheet Details:",
        ]
        for layout in result.layouts:
            lines.append(
                f"  Sheet {layout.sheet_index + 1}: "
                f"{_plural(layout.piece_count, 'piece')}, "
                f"{layout.waste_percentage:.1f}% waste ({layout.source})"
            )
        return "\n".join(lines)

    def render_html(self, result: PackingResult, title: str = "Cutting Plan") -> str:
        """Generate a printable HTML page with the plan table and diagrams.

        Args:
            result: Complete packing result.
            title: Page title.

        Returns:
            A standalone HTML document.
        """
        metrics = result.metrics
        body: list[str] = [
            f"<h1>{escape(title)}</h1>",
            '<table class="summary">',
            f"<tr><th>Sheets</th><td>{metrics.total_sheets}</td></tr>",
            f"<tr><th>Cuts</th><td>{metrics.total_cuts}</td></tr>",
            f"<tr><th>Edges</th><td>{metrics.total_edge_banding}</td></tr>",
            f"<tr><th>Waste</th><td>{metrics.total_waste_percentage:.1f}%</td></tr>",
            "</table>",
        ]

        if result.messages:
            body.append('<ul class="messages">')
            body.extend(f"<li>{escape(message)}</li>" for message in result.messages)
            body.append("</ul>")

        total_sheets = len(result.layouts)
        for layout in result.layouts:
            body.append('<section class="sheet">')
            body.append(f"<h2>Sheet {layout.sheet_index + 1}</h2>")
            body.append("<table><tr><th>Qty</th><th>Piece</th></tr>")
            for label, count in _group_placements(layout).items():
                body.append(f"<tr><td>{count}</td><td>{escape(label)}</td></tr>")
            body.append("</table>")
            body.append(self.render_svg(layout, total_sheets))
            body.append("</section>")

        return "\n".join(
            [
                "<!DOCTYPE html>",
                "<html>",
                "<head>",
                '<meta charset="utf-8">',
                f"<title>{escape(title)}</title>",
                "<style>",
                "body { font-family: Arial, sans-serif; }",
                "table { border-collapse: collapse; margin-bottom: 1em; }",
                "th, td { border: 1px solid #999; padding: 2px 8px; }",
                ".sheet { page-break-after: always; }",
                "svg { max-width: 100%; height: auto; }",
                "</style>",
                "</head>",
                "<body>",
                *body,
                "</body>",
                "</html>",
            ]
        )


def _group_placements(layout: SheetLayout) -> dict[str, int]:
    """Count identical placed sizes on a sheet, in order of appearance."""
    counts: dict[str, int] = {}
    for placement in layout.placements:
        counts[placement.dims_text] = counts.get(placement.dims_text, 0) + 1
    return counts
