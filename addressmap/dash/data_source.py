"""
Host data page loading.

Reads a table with polars and exposes it the way an analytics host pages
its data: one dimension cell (text + element number) and one measure cell
per row. Element numbers index the distinct dimension values in first-seen
order, so repeated addresses share one element.
"""

import math
from pathlib import Path

import polars as pl

from addressmap.configs.logging_init import logger
from addressmap.models.map_data import DataCell, DataPage


def read_frame(path: str | Path) -> pl.DataFrame:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pl.read_csv(path)
    if suffix in (".parquet", ".pq"):
        return pl.read_parquet(path)
    raise ValueError(f"Unsupported data file type: {suffix}")


def frame_to_data_page(df: pl.DataFrame, dimension: str, measure: str) -> DataPage:
    missing = [c for c in (dimension, measure) if c not in df.columns]
    if missing:
        raise ValueError(f"Columns not found in data: {', '.join(missing)}")

    texts = df.get_column(dimension).cast(pl.Utf8).fill_null("").to_list()
    nums = df.get_column(measure).cast(pl.Float64, strict=False).to_list()

    element_numbers: dict[str, int] = {}
    matrix = []
    for text, num in zip(texts, nums):
        elem = element_numbers.setdefault(text, len(element_numbers))
        matrix.append(
            [
                DataCell(text=text, num=math.nan, elem_number=elem),
                DataCell(text="" if num is None else f"{num}", num=math.nan if num is None else num),
            ]
        )

    logger.info(f"Loaded data page: {len(matrix)} rows, {len(element_numbers)} distinct addresses")
    return DataPage(matrix=matrix)


def load_data_page(path: str | Path, dimension: str, measure: str) -> DataPage:
    return frame_to_data_page(read_frame(path), dimension, measure)
