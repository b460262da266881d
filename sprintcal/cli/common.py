from enum import Enum
from typing import Union, Optional, List, Any
from pprint import pprint
import json
from structlog import get_logger
import pandas as pd
from tabulate import tabulate
from pydantic import BaseModel

from sprintcal.settings import load_settings
from sprintcal.core.context import init_context_from_settings, SprintContext


logger = get_logger(__name__)


class OutputFormat(str, Enum):
    json = "json"
    tabulate = "tabulate"
    csv = "csv"
    pprint = "pprint"


def get_context() -> SprintContext:
    return init_context_from_settings(load_settings())


def _jsonable(value: Any, fields: Optional[List[str]] = None) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", include=set(fields) if fields else None)
    return value


def print_results(
    results: Union[list, pd.DataFrame, BaseModel],
    format_: OutputFormat = OutputFormat.tabulate,
    fields: Optional[Union[List[str], str]] = None,
):
    if isinstance(fields, str):
        fields = fields.split(",")
    if isinstance(results, BaseModel):
        results = [results]

    if format_ == OutputFormat.tabulate:
        return _print_tabulate(results, fields)
    elif format_ == OutputFormat.json:
        return _print_json(results, fields)
    elif format_ == OutputFormat.csv:
        return _print_csv(results, fields)
    else:
        return pprint(results)


def _print_tabulate(
    results: Optional[Union[list, pd.DataFrame]],
    fields: Optional[List[str]] = None,
):
    if isinstance(results, list) and results:
        head, *_ = results
        if not isinstance(head, (dict, BaseModel)):
            raise ValueError("Don't know how to print ")
        jsonable_results = _fix_fields_ordering([_jsonable(e, fields) for e in results], fields)
        header_dict = {h: h.replace("_", "\n") for h in jsonable_results[0].keys()}
        print(tabulate(jsonable_results, headers=header_dict, tablefmt="psql"))
    elif isinstance(results, pd.DataFrame):
        print(tabulate(results, headers="keys", tablefmt="psql", showindex=False))


def _print_json(
    results: Optional[Union[list, pd.DataFrame]],
    fields: Optional[List[str]] = None,
):
    if isinstance(results, list):
        jsonable_results = _fix_fields_ordering([_jsonable(e, fields) for e in results], fields)
        print(json.dumps(jsonable_results, indent=2))
    elif isinstance(results, pd.DataFrame):
        ret = results.astype(object).where(pd.notnull(results), None)
        print(json.dumps(ret.to_dict(orient="records"), indent=2, default=str))


def _print_csv(
    results: Optional[Union[list, pd.DataFrame]],
    fields: Optional[List[str]] = None,
):
    if isinstance(results, list) and results:
        jsonable_results = _fix_fields_ordering([_jsonable(e, fields) for e in results], fields)
        headers = jsonable_results[0].keys()
        print(",".join(headers))
        for r in jsonable_results:
            print(",".join(_as_string(v) for v in r.values()))
    elif isinstance(results, pd.DataFrame):
        print(results.to_csv(index=False), end="")


def _as_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = "-".join(str(v) for v in value)
    if isinstance(value, str) and "," in value:
        return f'"{value}"'
    else:
        return str(value)


def _fix_fields_ordering(results: list, fields: Optional[List[str]]) -> list:
    if not fields:
        return results
    else:
        ret = []
        for result in results:
            ret.append({f: result[f] for f in fields})
        return ret
