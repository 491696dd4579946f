"""
Table reconstruction module for pick-list OCR text.

Provides:
- Bucketing of classified lines by token type
- Positional re-pairing of buckets into table rows
- Row serialization to the externally surfaced record format

Rows are rebuilt by index correspondence between independently collected
buckets, not by spatial layout. The i-th item code is paired with the
i-th component code, quantity and storage bin.
"""

import logging
from dataclasses import dataclass, replace
from functools import reduce
from typing import Any, Dict, List, Sequence, Tuple

from .classify import (
    ClassifiedLine,
    TokenClass,
    find_header_index,
    is_valid_component_code,
    is_valid_item_code,
    split_lines,
    tag_lines,
)

logger = logging.getLogger(__name__)


# External record keys, in output order
ROW_KEYS = ("Res Item", "Component", "Req Qty", "Comm Qty", "Storage Bin")

_BUCKET_FIELDS = {
    TokenClass.ITEM_CODE: "item_codes",
    TokenClass.COMPONENT_CODE: "component_codes",
    TokenClass.QUANTITY: "quantities",
    TokenClass.STORAGE_BIN: "storage_bins",
}

_LOG_LABELS = {
    TokenClass.ITEM_CODE: "Res Item",
    TokenClass.COMPONENT_CODE: "Component",
    TokenClass.QUANTITY: "Quantity",
    TokenClass.STORAGE_BIN: "Storage Bin",
}


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class TableRow:
    """A reconstructed pick-list row."""
    item_code: str
    component_code: str
    description: str = ""
    req_qty: str = ""
    comm_qty: str = ""
    pick_qty: str = ""
    uom: str = ""
    cd: str = ""
    storage_bin: str = ""
    barcode: str = ""

    def to_dict(self) -> Dict[str, Any]:
        values = (self.item_code, self.component_code, self.req_qty, self.comm_qty, self.storage_bin)
        return dict(zip(ROW_KEYS, values))


@dataclass(frozen=True)
class TokenBuckets:
    """Ordered token values per class, in order of appearance."""
    item_codes: Tuple[str, ...] = ()
    component_codes: Tuple[str, ...] = ()
    quantities: Tuple[str, ...] = ()
    storage_bins: Tuple[str, ...] = ()

    def add(self, token: ClassifiedLine) -> "TokenBuckets":
        """Return new buckets with the token appended, if it is a table token."""
        field_name = _BUCKET_FIELDS.get(token.token_class)
        if field_name is None:
            return self

        logger.debug(
            f"Found {_LOG_LABELS[token.token_class]}: {token.value} at line {token.line.index}"
        )
        return replace(self, **{field_name: getattr(self, field_name) + (token.value,)})

    def sizes(self) -> Dict[str, int]:
        return {name: len(getattr(self, name)) for name in _BUCKET_FIELDS.values()}


# ============================================================================
# Reconstruction
# ============================================================================

def collect_buckets(tokens: Sequence[ClassifiedLine]) -> TokenBuckets:
    """Fold classified lines into four ordered buckets in one pass."""
    return reduce(lambda buckets, token: buckets.add(token), tokens, TokenBuckets())


def _at(values: Tuple[str, ...], index: int) -> str:
    return values[index] if index < len(values) else ""


def pair_rows(buckets: TokenBuckets) -> List[TableRow]:
    """
    Re-pair buckets into rows by position in the item-code bucket.

    A row is built for index i only when a component code exists at i and
    both codes pass the strict pattern check. Missing quantities and
    storage bins are left empty. Item codes beyond the component bucket
    are dropped.
    """
    rows = []

    for i, item_code in enumerate(buckets.item_codes):
        if i >= len(buckets.component_codes):
            break

        component_code = buckets.component_codes[i]
        req_qty = _at(buckets.quantities, i)
        storage_bin = _at(buckets.storage_bins, i)

        if not (is_valid_item_code(item_code) and is_valid_component_code(component_code)):
            continue

        rows.append(TableRow(
            item_code=item_code,
            component_code=component_code,
            req_qty=req_qty,
            comm_qty=req_qty,
            storage_bin=storage_bin,
        ))
        logger.debug(f"Added row: {item_code}, {component_code}, {req_qty}, {storage_bin}")

    return rows


def reconstruct_table(text: str) -> List[TableRow]:
    """
    Reconstruct pick-list rows from raw OCR text.

    Never raises. An empty list means no table could be rebuilt and the
    caller should fall back to the diagnostics report.

    Args:
        text: Full OCR text with line breaks preserved

    Returns:
        Rows in item-code appearance order
    """
    lines = split_lines(text)
    header_index = find_header_index(lines)

    logger.debug(f"Header found at index: {header_index if header_index is not None else -1}")

    if header_index is None:
        logger.debug("No header found in OCR text")
        return []

    tokens = [t for t in tag_lines(lines, header_index) if t.is_token]
    buckets = collect_buckets(tokens)

    sizes = buckets.sizes()
    logger.debug(f"Res Items found: {sizes['item_codes']}")
    logger.debug(f"Components found: {sizes['component_codes']}")
    logger.debug(f"Quantities found: {sizes['quantities']}")
    logger.debug(f"Storage Bins found: {sizes['storage_bins']}")

    rows = pair_rows(buckets)

    logger.debug(f"Total rows parsed: {len(rows)}")
    return rows
