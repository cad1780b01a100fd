#!/usr/bin/env python3
"""
PROTEST ACTION DENSIFIER — Wide demand/response columns → dense long table
==========================================================================
protesterdemand1..4 and stateresponse1..7 are sparse labels per protest.
Downstream co-occurrence counts need "did not occur" to be explicit, so:

  Pass 1: collect (id, source, action) triples, build the global vocabulary
  Pass 2: cross join every protest id with the vocabulary, flag occurred

Output: id, action_source, action, occurred
Row count is exactly |protests| x |vocabulary|; anything else raises.
"""

import re

import pandas as pd

from protest_core import ACTION_SOURCES, DEMAND_PREFIX, RESPONSE_PREFIX, DensificationError

_SPACES_RE = re.compile(r"\s+")


def action_columns(df: pd.DataFrame) -> list[str]:
    """Demand/response columns present in df, in table order."""
    return [c for c in df.columns if any(c.startswith(p) for p in ACTION_SOURCES)]


def classify_source(column: str) -> str:
    for prefix, source in ACTION_SOURCES.items():
        if column.startswith(prefix):
            return source
    raise ValueError(f"Not an action column: {column}")


def normalize_label(label) -> str:
    """Trim, collapse whitespace, lower-case. Null → ''."""
    if label is None or pd.isna(label):
        return ""
    return _SPACES_RE.sub(" ", str(label)).strip().lower()


def collect_actions(df: pd.DataFrame, id_col: str = "id") -> pd.DataFrame:
    """
    Melt action columns to distinct (id, action_source, action) triples.
    Empty labels are dropped; a label repeated across columns of the same
    source counts once.
    """
    cols = action_columns(df)
    if not cols:
        return pd.DataFrame({id_col: pd.Series(dtype=df[id_col].dtype),
                             "action_source": pd.Series(dtype=object),
                             "action": pd.Series(dtype=object)})
    long = df[[id_col] + cols].melt(id_vars=id_col, var_name="column", value_name="action")
    long["action"] = long["action"].map(normalize_label)
    long = long[long["action"] != ""].copy()
    long["action_source"] = long["column"].map(classify_source)
    observed = long[[id_col, "action_source", "action"]].drop_duplicates()
    return observed.sort_values([id_col, "action_source", "action"]).reset_index(drop=True)


def action_vocabulary(observed: pd.DataFrame) -> pd.DataFrame:
    """All distinct (action_source, action) pairs across the corpus."""
    vocab = observed[["action_source", "action"]].drop_duplicates()
    return vocab.sort_values(["action_source", "action"]).reset_index(drop=True)


def verify_dense(dense: pd.DataFrame, n_ids: int, n_vocab: int, id_col: str = "id") -> None:
    """Raise DensificationError on any missing or duplicate cell."""
    expected = n_ids * n_vocab
    if len(dense) != expected:
        raise DensificationError(
            f"Dense action table has {len(dense)} rows, expected {n_ids} x {n_vocab} = {expected}"
        )
    dupes = dense.duplicated(subset=[id_col, "action_source", "action"]).sum()
    if dupes:
        raise DensificationError(f"Dense action table has {dupes} duplicated (id, action) cell(s)")


def densify_actions(df: pd.DataFrame, id_col: str = "id") -> pd.DataFrame:
    """
    One row per (protest id, vocabulary pair), occurred True where recorded.
    Protests with no recorded action still get a full block of False rows.
    """
    observed = collect_actions(df, id_col=id_col)
    vocab = action_vocabulary(observed)

    ids = pd.DataFrame({id_col: df[id_col].drop_duplicates().sort_values().to_numpy()})
    grid = ids.merge(vocab, how="cross")
    dense = grid.merge(observed, on=[id_col, "action_source", "action"], how="left", indicator=True)
    dense["occurred"] = dense.pop("_merge").eq("both")

    verify_dense(dense, len(ids), len(vocab), id_col=id_col)
    recorded = int(dense["occurred"].sum())
    if recorded != len(observed):
        raise DensificationError(f"{recorded} occurred cell(s) for {len(observed)} recorded action(s)")
    return dense.reset_index(drop=True)


def collapse_actions(dense: pd.DataFrame, id_col: str = "id") -> dict:
    """Inverse of densification: id → set of (action_source, action) that occurred."""
    out = {i: set() for i in dense[id_col].unique()}
    hit = dense[dense["occurred"]]
    for pid, source, action in zip(hit[id_col], hit["action_source"], hit["action"]):
        out[pid].add((source, action))
    return out


def action_cooccurrence(dense: pd.DataFrame, id_col: str = "id") -> pd.DataFrame:
    """
    Number of protests where a protester demand and a state response both occurred.
    Rows: demand, columns: response. Every vocabulary pair is present (zeros kept).
    """
    demands = dense[dense["action_source"] == ACTION_SOURCES[DEMAND_PREFIX]]
    responses = dense[dense["action_source"] == ACTION_SOURCES[RESPONSE_PREFIX]]
    index = sorted(demands["action"].unique())
    columns = sorted(responses["action"].unique())
    pairs = demands[demands["occurred"]][[id_col, "action"]].merge(
        responses[responses["occurred"]][[id_col, "action"]],
        on=id_col,
        suffixes=("_demand", "_response"),
    )
    if pairs.empty:
        return pd.DataFrame(0, index=index, columns=columns)
    counts = pd.crosstab(pairs["action_demand"], pairs["action_response"])
    return counts.reindex(index=index, columns=columns, fill_value=0)
