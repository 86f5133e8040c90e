import csv
import os

HEADERS = ["method", "path", "middleware", "params"]


def _stringify(value):
    if isinstance(value, (list, tuple)):
        return ";".join(map(str, value))
    return value if value is not None else ""


def export_to_csv(routes, out_path):
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=HEADERS)
        writer.writeheader()
        for route in routes or []:
            row = route.to_dict()
            writer.writerow({h: _stringify(row[h]) for h in HEADERS})
    return out_path
