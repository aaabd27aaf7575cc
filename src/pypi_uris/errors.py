from __future__ import annotations


class UsageError(ValueError):
    """
    调用方式错误：位置参数过多，或缺省值需要 PackageIdentity 但未提供。
    """

    def __init__(self, func: str, message: str) -> None:
        super().__init__(f"{func}: {message}")
        self.func = func


class RecipeError(ValueError):
    """
    配方清单无法读取或内容不完整。
    """
