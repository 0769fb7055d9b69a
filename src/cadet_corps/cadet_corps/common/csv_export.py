from __future__ import annotations

import csv
import io
from typing import Iterable, Mapping, Sequence


def write_csv(fieldnames: Sequence[str], rows: Iterable[Mapping[str, object]]) -> str:
    """Render dict rows as CSV text with a header line.

    Shared by the attendance and records exports.
    """

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue()
