"""
格式保留匿名化工具 - FF3-1 格式保留加密演示
支持通用文本、纯数字、证件号、邮箱与人名，密文与原文格式一致且可还原
所有处理在本地完成，保护数据隐私
"""

import logging
from enum import Enum

import streamlit as st

try:
    from fpe_core import (
        FF3Cipher,
        StringAnonymizer,
        NumberStringAnonymizer,
        PersonalIdentifierAnonymizer,
        EmailAnonymizer,
        NameAnonymizer,
        PREDEFINED_PATTERNS,
        derive_key_tweak_pair,
        new_salt,
        FPEError,
        Alphabets,
    )
except ImportError as exc:
    st.error("❌ 缺少依赖库，请先安装：pip install -e .")
    raise exc

logger = logging.getLogger(__name__)


# ============= 常量定义 =============

class Config:
    """应用配置常量"""
    PAGE_TITLE = "格式保留匿名化工具"
    PAGE_LAYOUT = "wide"

    MIN_PASSWORD_LENGTH = 6

    DEFAULT_SAMPLES = {
        "text": "Hello, World! This is a demo text.",
        "number": "4111111111111111",
        "identifier": "1960101123456",
        "email": "john.doe@example.com",
        "name": "John Smith",
    }


class AnonymizerKind(Enum):
    """匿名化器类型枚举"""
    TEXT = "text"  # 通用文本：保留空格和标点
    NUMBER = "number"  # 纯数字：4111... -> 7350...
    IDENTIFIER = "identifier"  # 证件号：按捕获组加密
    EMAIL = "email"  # 邮箱：默认保留域名
    NAME = "name"  # 人名：保留首字母大写


KIND_LABELS = {
    AnonymizerKind.TEXT: "通用文本",
    AnonymizerKind.NUMBER: "纯数字",
    AnonymizerKind.IDENTIFIER: "证件号",
    AnonymizerKind.EMAIL: "电子邮箱",
    AnonymizerKind.NAME: "人名",
}


# ============= 匿名化器构建 =============

def build_anonymizer(kind: AnonymizerKind, cipher: FF3Cipher, options: dict):
    """按类型与选项构建匿名化器"""
    if kind == AnonymizerKind.TEXT:
        anonymizer = StringAnonymizer(cipher)
        anonymizer.set_preserve_spaces(options.get("preserve_spaces", True))
        anonymizer.set_preserve_punctuation(options.get("preserve_punctuation", True))
    elif kind == AnonymizerKind.NUMBER:
        anonymizer = NumberStringAnonymizer(cipher)
    elif kind == AnonymizerKind.IDENTIFIER:
        anonymizer = PersonalIdentifierAnonymizer(cipher)
        anonymizer.configure(options.get("identifier_format", "romanian_cnp"))
    elif kind == AnonymizerKind.EMAIL:
        anonymizer = EmailAnonymizer(cipher)
        anonymizer.set_preserve_domain(options.get("preserve_domain", True))
        anonymizer.set_preserve_dots(options.get("preserve_dots", True))
        anonymizer.set_preserve_underscores(options.get("preserve_underscores", False))
    else:
        anonymizer = NameAnonymizer(cipher)
        anonymizer.set_preserve_capitalization(options.get("preserve_capitalization", True))
    return anonymizer


def run_transform(
    text: str,
    password: str,
    salt_hex: str,
    kind: AnonymizerKind,
    options: dict,
    encrypting: bool = True
) -> tuple[str, dict]:
    """派生密钥后执行匿名化或还原"""
    try:
        salt = bytes.fromhex(salt_hex)
    except ValueError as e:
        raise ValueError("盐值必须是十六进制字符串") from e

    pair = derive_key_tweak_pair(password, salt, label=kind.value)
    cipher = FF3Cipher(pair.key, pair.tweak)
    anonymizer = build_anonymizer(kind, cipher, options)

    if encrypting:
        return anonymizer.anonymize_with_stats(text)
    return anonymizer.deanonymize_with_stats(text)


def has_unstable_characters(text: str) -> bool:
    """是否含有字母数字、ASCII 标点和空白之外的字符，这类字符可能导致还原结果与原文不同"""
    stable = set(Alphabets.ALPHANUMERIC + Alphabets.PUNCTUATION + "\t\n")
    return any(ch not in stable for ch in text)


# ============= 页面渲染 =============

def init_page_style():
    """初始化页面样式"""
    st.set_page_config(
        page_title=Config.PAGE_TITLE,
        layout=Config.PAGE_LAYOUT,
        page_icon="🔐"
    )

    st.markdown(
        """
        <style>
        :root {
            --bg-card: rgba(17, 24, 39, 0.7);
            --border-color: rgba(99, 102, 241, 0.2);
            --accent-primary: #818cf8;
            --text-secondary: #9ca3af;
            --warning: #fbbf24;
        }

        .block-container {
            padding-top: 2.5rem;
            max-width: 1200px;
        }

        .app-header h1 {
            font-weight: 700;
            color: var(--accent-primary);
            margin-bottom: 0.25rem;
        }

        .app-header p {
            color: var(--text-secondary);
        }

        .card {
            background: var(--bg-card);
            border: 1px solid var(--border-color);
            border-radius: 16px;
            padding: 1.25rem 1.5rem;
            margin-bottom: 1rem;
        }

        .card-title {
            font-size: 1.1rem;
            font-weight: 600;
            margin-bottom: 0.75rem;
        }

        .stat-item {
            display: inline-block;
            min-width: 90px;
            margin-right: 0.75rem;
            text-align: center;
        }

        .stat-value {
            font-size: 1.5rem;
            font-weight: 700;
            color: var(--accent-primary);
        }

        .stat-label {
            font-size: 0.8rem;
            color: var(--text-secondary);
        }

        .stat-warning .stat-value {
            color: var(--warning);
        }
        </style>
        """,
        unsafe_allow_html=True
    )


def render_header():
    """渲染页面头部"""
    st.markdown(
        """
        <div class="app-header">
            <h1>🔐 格式保留匿名化工具</h1>
            <p>FF3-1 格式保留加密 · 长度与字符集不变 · 同一密码可还原 · 数据不离开您的设备</p>
        </div>
        """,
        unsafe_allow_html=True
    )


def reset_salt():
    st.session_state["salt_hex"] = new_salt().hex()


def render_key_card():
    """渲染密钥卡片"""
    st.markdown('<div class="card">', unsafe_allow_html=True)
    st.markdown('<div class="card-title">🔑 密钥材料</div>', unsafe_allow_html=True)

    if "salt_hex" not in st.session_state:
        st.session_state["salt_hex"] = new_salt().hex()

    password = st.text_input(
        "密码",
        type="password",
        placeholder="用于派生密钥和 tweak（必须牢记，丢失无法还原）",
        help="相同的密码和盐值总是派生出相同的密钥"
    )

    salt_hex = st.text_input(
        "盐值（十六进制）",
        key="salt_hex",
        help="还原时需要使用生成时的盐值"
    )

    st.button("🎲 重新生成盐值", use_container_width=True, on_click=reset_salt)

    st.markdown("</div>", unsafe_allow_html=True)
    return password, salt_hex


def render_options_card():
    """渲染匿名化选项卡片"""
    st.markdown('<div class="card">', unsafe_allow_html=True)
    st.markdown('<div class="card-title">⚙️ 匿名化选项</div>', unsafe_allow_html=True)

    kind = st.selectbox(
        "数据类型",
        options=list(AnonymizerKind),
        format_func=lambda x: KIND_LABELS[x],
        index=0
    )

    options = {}
    if kind == AnonymizerKind.TEXT:
        options["preserve_spaces"] = st.checkbox("保留空白字符", value=True)
        options["preserve_punctuation"] = st.checkbox("保留标点符号", value=True)
    elif kind == AnonymizerKind.IDENTIFIER:
        options["identifier_format"] = st.selectbox(
            "证件格式",
            options=list(PREDEFINED_PATTERNS),
            format_func=lambda x: PREDEFINED_PATTERNS[x].description
        )
    elif kind == AnonymizerKind.EMAIL:
        options["preserve_domain"] = st.checkbox("保留域名", value=True)
        options["preserve_dots"] = st.checkbox("保留点号", value=True)
        options["preserve_underscores"] = st.checkbox("保留下划线", value=False)
    elif kind == AnonymizerKind.NAME:
        options["preserve_capitalization"] = st.checkbox("保留首字母大写", value=True)

    st.markdown("</div>", unsafe_allow_html=True)
    return kind, options


def render_input_card(kind: AnonymizerKind):
    """渲染输入卡片"""
    st.markdown('<div class="card">', unsafe_allow_html=True)
    st.markdown('<div class="card-title">📝 输入</div>', unsafe_allow_html=True)

    text = st.text_area(
        "输入文本",
        height=120,
        value=Config.DEFAULT_SAMPLES[kind.value],
        key=f"input_{kind.value}",
        label_visibility="collapsed"
    )

    col1, col2 = st.columns(2)
    with col1:
        anonymize_button = st.button("🚀 匿名化", use_container_width=True, type="primary")
    with col2:
        deanonymize_button = st.button("🔓 还原", use_container_width=True)

    st.markdown("</div>", unsafe_allow_html=True)
    return text, anonymize_button, deanonymize_button


def display_stats(stats: dict):
    """显示处理统计信息"""
    if not stats:
        return

    items = [
        ("segments", "处理片段", ""),
        ("fallbacks", "降级处理", " stat-warning" if stats.get("fallbacks") else ""),
        ("unchanged", "原样返回", " stat-warning" if stats.get("unchanged") else ""),
    ]
    html = "".join(
        f'<div class="stat-item{extra}"><div class="stat-value">{stats.get(key, 0)}</div>'
        f'<div class="stat-label">{label}</div></div>'
        for key, label, extra in items
    )
    st.markdown(html, unsafe_allow_html=True)
    st.caption(f"保留模式：{stats.get('mode', 'none')}")

    if stats.get("fallbacks"):
        st.warning("⚠️ 部分片段超出派生字母表的长度范围，已改用字母数字字母表处理，还原结果可能与原文不同")


# ============= 主应用 =============

def main():
    """主应用入口"""
    init_page_style()
    render_header()

    col1, col2 = st.columns([1, 1.4])

    with col1:
        password, salt_hex = render_key_card()
        kind, options = render_options_card()

    with col2:
        text, anonymize_button, deanonymize_button = render_input_card(kind)
        status = st.empty()
        result_area = st.container()

    if not (anonymize_button or deanonymize_button):
        return

    if not text:
        status.error("❌ 请输入需要处理的文本")
        return

    if len(password) < Config.MIN_PASSWORD_LENGTH:
        status.error(f"❌ 密码长度至少{Config.MIN_PASSWORD_LENGTH}位")
        return

    try:
        result, stats = run_transform(
            text,
            password,
            salt_hex,
            kind,
            options,
            encrypting=anonymize_button
        )
    except FPEError as e:
        logger.info("transform rejected: %s", e)
        status.error(f"❌ 输入不在可加密范围内：{str(e)}")
        return
    except ValueError as e:
        status.error(f"❌ 处理失败：{str(e)}")
        return

    status.success("✅ 匿名化完成！" if anonymize_button else "✅ 还原完成！")
    if anonymize_button and has_unstable_characters(text):
        st.warning("⚠️ 输入包含非 ASCII 字符（如中文或带音标的字母），密文中若不再出现这些字符，还原结果将与原文不同")
    with result_area:
        st.markdown('<div class="card">', unsafe_allow_html=True)
        st.markdown('<div class="card-title">📦 结果</div>', unsafe_allow_html=True)
        st.code(result, language=None)
        display_stats(stats)
        st.markdown("</div>", unsafe_allow_html=True)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    main()
