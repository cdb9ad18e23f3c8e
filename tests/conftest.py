"""Shared fixtures: synthetic Consulta Amigable report pages."""

import pytest


def _cells(concepto, monto, columns):
    cells = ["<td>x</td>"] * columns
    if columns > 1:
        cells[1] = f"<td>{concepto}</td>"
    if columns > 7:
        cells[7] = f"<td>{monto}</td>"
    return "".join(cells)


def build_report(rows, columns=8, table_class="Data"):
    """
    Render a report page.

    rows: iterable of (concepto, monto_text) pairs rendered as data rows.
    """
    body = ["<tr><th>#</th><th>Concepto</th><th>Devengado</th></tr>"]
    for concepto, monto in rows:
        body.append(f"<tr>{_cells(concepto, monto, columns)}</tr>")

    return f"""
    <html>
    <head><meta charset="utf-8"><title>Consulta Amigable</title></head>
    <body>
        <table class="Header"><tr><td>Año de Ejecución</td></tr></table>
        <table class="{table_class}">
            {''.join(body)}
        </table>
    </body>
    </html>
    """


@pytest.fixture
def make_report():
    """Factory fixture returning report page HTML."""
    return build_report


REPORT_URL = (
    "https://apps5.mineco.gob.pe/transparencia/Navegador/Navegar_7.aspx"
    "?y=2024&ap=ActProy&cpage=1"
)


@pytest.fixture
def report_url():
    return REPORT_URL
