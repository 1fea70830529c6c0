"""
异常定义模块
所有异常均继承 ValueError，调用方可统一捕获
"""


class FPEError(ValueError):
    """格式保留加密基础异常"""


class DomainLengthError(FPEError):
    """输入长度超出字母表允许的范围"""


class InvalidSymbolError(FPEError):
    """字符不在字母表中"""


class OutOfRangeError(FPEError):
    """下标超出字母表基数"""


class InvalidTweakLengthError(FPEError):
    """tweak 长度不是 7 字节"""


class InvalidKeyLengthError(FPEError):
    """密钥长度不是 128/192/256 位"""


class InvalidAlphabetError(FPEError):
    """字母表少于 2 个字符或包含重复字符"""


class InvalidPatternError(FPEError):
    """保留正则无法编译或没有捕获组"""


class RepresentabilityError(FPEError):
    """派生字母表无法容纳该片段，由适配层降级处理"""
