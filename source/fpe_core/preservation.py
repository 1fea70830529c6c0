"""
字符保留与片段替换工具
加密和解密共用同一套下标映射，保证拼接可逆
"""

import re
from typing import Collection, List, Tuple

Position = Tuple[int, str]
Span = Tuple[int, int]


def find_preserved(text: str, preserved: Collection[str]) -> List[Position]:
    """按下标升序记录需要保留的 (下标, 字符)"""
    return [(i, ch) for i, ch in enumerate(text) if ch in preserved]


def strip_preserved(text: str, positions: List[Position]) -> str:
    """去掉保留字符，其余字符保持相对顺序"""
    skip = {i for i, _ in positions}
    return "".join(ch for i, ch in enumerate(text) if i not in skip)


def splice_preserved(transformed: str, positions: List[Position]) -> str:
    """
    把保留字符插回原位置。

    positions 中的下标针对原始输入。按升序插入时，前面的保留字符已经就位，
    当前结果的前缀长度恰好等于目标下标，因此直接在该下标插入即可；
    下标超出当前长度时追加到末尾。
    """
    chars = list(transformed)
    for index, ch in positions:
        if index >= len(chars):
            chars.append(ch)
        else:
            chars.insert(index, ch)
    return "".join(chars)


def capture_spans(match: re.Match) -> List[Span]:
    """返回非空且互不重叠的捕获组区间，嵌套组只取最外层"""
    spans: List[Span] = []
    for group in range(1, (match.re.groups or 0) + 1):
        start, end = match.span(group)
        if start < 0 or start == end:
            continue
        if any(start < s_end and s_start < end for s_start, s_end in spans):
            continue
        spans.append((start, end))
    return spans


def replace_spans(text: str, replacements: List[Tuple[Span, str]]) -> str:
    """按 (区间, 替换文本) 列表重建字符串，区间外的字面文本不变"""
    parts = []
    cursor = 0
    for (start, end), value in sorted(replacements, key=lambda item: item[0]):
        parts.append(text[cursor:start])
        parts.append(value)
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)


def sanitize(text: str, allowed: Collection[str], sentinel: str) -> str:
    """不在安全字母表中的字符替换为哨兵字符"""
    return "".join(ch if ch in allowed else sentinel for ch in text)


def pad(text: str, length: int, filler: str) -> str:
    """右侧填充到指定长度"""
    if len(text) >= length:
        return text
    return text + filler * (length - len(text))


def is_numeric(text: str) -> bool:
    """是否全部为 ASCII 数字"""
    return bool(text) and text.isascii() and text.isdigit()
