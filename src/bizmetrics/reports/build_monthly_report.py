from __future__ import annotations

import sys

from bizmetrics.config.settings import settings
from bizmetrics.reports.monthly import build_report_data
from bizmetrics.reports.pdf import render_report_pdf


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python -m bizmetrics.reports.build_monthly_report <Month> <year>")
        sys.exit(2)
    month, year = sys.argv[1].capitalize(), sys.argv[2]

    report = build_report_data(month, year)
    pdf = render_report_pdf(report)

    settings.REPORTS_DIR.mkdir(parents=True, exist_ok=True)
    out_path = settings.REPORTS_DIR / f"monthly_{month}_{year}.pdf"
    out_path.write_bytes(pdf)

    print(f"✅ Wrote: {out_path} | {len(pdf):,} bytes")


if __name__ == "__main__":
    main()
