from __future__ import annotations

# Pull the full salesdata table into data/processed so the console can run
# without network access. Pages read this snapshot only when the store fails.

import pandas as pd

from bizmetrics.config.settings import settings
from bizmetrics.sales.loader import snapshot_path
from bizmetrics.store.supabase_client import SupabaseStore


def main() -> None:
    store = SupabaseStore()
    rows = store.fetch_rows(settings.SALES_TABLE)
    if not rows:
        raise ValueError(f"No rows in {settings.SALES_TABLE}; nothing to snapshot")

    df = pd.DataFrame(rows)
    # Values are strings in the store; keep them that way so parsing stays in one place
    df = df.astype("string")

    out_path = snapshot_path()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(out_path, index=False)

    print(f"✅ Wrote: {out_path} | shape={df.shape}")


if __name__ == "__main__":
    main()
