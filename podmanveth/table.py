from podmanveth.config import TableRow


header = ["CONTAINER ID", "VETH", "NAMES"]
ip_header = "IP"


def format_row(row: TableRow, show_ip: bool = False) -> str:
    fields = [row.container_id, row.veth, row.name]
    if show_ip:
        fields.append(row.ip or "")
    return "\t".join(fields)


def render_table(rows: list[TableRow], show_header: bool, show_ip: bool = False) -> str:
    """Tab separated table, one line per row. The header is only for interactive terminals"""
    lines: list[str] = []
    if show_header:
        lines.append("\t".join(header + [ip_header] if show_ip else header))
    lines.extend(format_row(row, show_ip) for row in rows)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
