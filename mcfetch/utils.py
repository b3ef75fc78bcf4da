"""
元数据文档工具

提供字段路径投影（extract）、数组展开（flatten）以及版本号提取。

路径语法:
    downloads.server.url          逐级字段访问
    promos["1.18.2-latest"]       含点号的键使用引号
    versions[].id                 展开数组（对象按值展开）
    versions[id="1.18.2"].url     按字段值筛选元素
    versions[0].id                按下标取数组元素
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from mcfetch.exceptions import FieldNotFound

_TOKEN_RE = re.compile(
    r"""
    \[\](?P<flatten>)
    | \[(?P<index>\d+)\]
    | \["(?P<key>(?:[^"\\]|\\.)*)"\]
    | \[(?P<field>[^=\]"]+)=(?:"(?P<quoted>(?:[^"\\]|\\.)*)"|(?P<bare>[^\]]*))\]
    | (?P<dot>\.)?(?P<name>[^.\[\]]+)
    """,
    re.VERBOSE,
)

_UNESCAPE_RE = re.compile(r"\\(.)")

_NUMERIC_RE = re.compile(r"[0-9.]+")


@dataclass(frozen=True)
class PathStep:
    """路径中的单个步骤"""

    kind: str  # field, flatten, select
    name: Optional[str] = None
    value: Optional[str] = None


def _unescape(text: str) -> str:
    return _UNESCAPE_RE.sub(r"\1", text)


def parse_path(path: str) -> List[PathStep]:
    """将路径字符串解析为步骤列表"""
    steps: List[PathStep] = []
    pos = 0
    while pos < len(path):
        match = _TOKEN_RE.match(path, pos)
        if not match or (match.group("dot") and not steps):
            raise ValueError(f"无效的字段路径: {path!r} (位置 {pos})")
        if match.group("flatten") is not None:
            steps.append(PathStep("flatten"))
        elif match.group("index") is not None:
            steps.append(PathStep("field", name=match.group("index")))
        elif match.group("key") is not None:
            steps.append(PathStep("field", name=_unescape(match.group("key"))))
        elif match.group("field") is not None:
            if match.group("quoted") is not None:
                value = _unescape(match.group("quoted"))
            else:
                value = match.group("bare")
            steps.append(PathStep("select", name=match.group("field"), value=value))
        else:
            if steps and not match.group("dot"):
                raise ValueError(f"无效的字段路径: {path!r} (位置 {pos})")
            steps.append(PathStep("field", name=match.group("name")))
        pos = match.end()
    return steps


def _get_field(value: Any, name: str, path: str) -> Any:
    if isinstance(value, dict):
        if name in value:
            return value[name]
    elif isinstance(value, list) and name.isdigit():
        index = int(name)
        if index < len(value):
            return value[index]
    raise FieldNotFound(f"字段不存在: {path}", path=path)


def _iter_items(value: Any, path: str) -> Iterable[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return value.values()
    raise FieldNotFound(f"无法展开非数组字段: {path}", path=path)


def _matches(actual: Any, expected: str) -> bool:
    if actual is None:
        return False
    if isinstance(actual, str):
        return actual == expected
    return json.dumps(actual) == expected


def extract(document: Any, path: str) -> Any:
    """
    按路径从文档中取值

    Args:
        document: 已解析的 JSON 文档
        path: 字段路径

    Returns:
        路径中包含展开或筛选时返回列表，否则返回单个值

    Raises:
        FieldNotFound: 路径无法解析
    """
    current = [document]
    multi = False
    for step in parse_path(path):
        values: List[Any] = []
        for value in current:
            if step.kind == "field":
                values.append(_get_field(value, step.name, path))
            elif step.kind == "flatten":
                values.extend(_iter_items(value, path))
            else:
                values.extend(
                    item
                    for item in _iter_items(value, path)
                    if isinstance(item, dict) and _matches(item.get(step.name), step.value)
                )
        if step.kind != "field":
            multi = True
        current = values
    return current if multi else current[0]


def flatten(document: Any) -> List[Any]:
    """
    与 jq 的 flatten 一致：顶层对象按值展开，嵌套数组递归展开，
    嵌套对象保持原样
    """
    if isinstance(document, dict):
        document = list(document.values())
    if not isinstance(document, list):
        return [document]
    leaves: List[Any] = []
    for item in document:
        if isinstance(item, list):
            leaves.extend(flatten(item))
        else:
            leaves.append(item)
    return leaves


def numeric_prefix(text: str) -> str:
    """取出第一段连续的数字与点号，例如 '1.18.2-recommended' -> '1.18.2'"""
    match = _NUMERIC_RE.search(text)
    return match.group(0) if match else text


def quote_key(key: str) -> str:
    """将任意键转换为路径中的引号键片段"""
    escaped = key.replace("\\", "\\\\").replace('"', '\\"')
    return f'["{escaped}"]'
