import logging
import pathlib

import pandas as pd

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}

# Column headers commonly found in registry extracts → score parameter columns
RENAME_MAP = {
    "sodium": "na",
    "creatinine": "creat",
    "bilirubin": "bili",
    "ethnicity": "eth",
    "c.arr": "c_arr",
    "cardiac_arrest": "c_arr",
    "dialysis_years": "dx",
    "previous_transplant": "prev_tx",
}


def normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize headers to snake_case lowercase and apply renames from RENAME_MAP.
    """
    df = df.copy()
    df.columns = (
        df.columns.astype(str)
        .str.strip()
        .str.replace(r"\s*\(.*?\)", "", regex=True)  # drop units such as "(umol/l)"
        .str.replace(r"[\s\-]+", "_", regex=True)  # spaces and hyphens → underscore
        .str.replace(":", "", regex=False)
        .str.lower()
    )
    return df.rename(
        columns={orig: target for orig, target in RENAME_MAP.items() if orig in df.columns}
    )


def load_tables(path) -> dict[str, pd.DataFrame]:
    """
    Read a CSV file or each worksheet of an Excel workbook into a DataFrame:
      - first row = header
      - headers normalized by `normalize_headers`
    A CSV file yields a single table named after the file stem.
    """
    path = pathlib.Path(path)
    tables: dict[str, pd.DataFrame] = {}

    if path.suffix.lower() in EXCEL_SUFFIXES:
        excel = pd.ExcelFile(path, engine="openpyxl")
        for sheet_name in excel.sheet_names:
            df = pd.read_excel(excel, sheet_name=sheet_name, header=0, engine="openpyxl")
            tables[sheet_name] = normalize_headers(df)
    elif path.suffix.lower() == ".csv":
        tables[path.stem] = normalize_headers(pd.read_csv(path))
    else:
        raise ValueError(f"Unsupported table format {path.suffix!r}: expected .csv or .xlsx")

    for name, df in tables.items():
        logger.debug("Loaded table %r with %d rows and %d columns", name, len(df), len(df.columns))
    return tables
