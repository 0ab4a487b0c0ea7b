"""
Offline dictionary translator, the last stage of the provider chain.

Substitutes known field-name terms in place, case-insensitively, wherever
they appear in the input (``"用户名"`` → ``"user名"``).  Entries are applied
one after another in table order, so overlapping terms can interact; the
result for such inputs depends on that order.  Text with no known terms is
returned unchanged.
"""

import logging
import re
from typing import Dict, Tuple, Union

from .schema import Language

logger = logging.getLogger(__name__)


ZH_EN_TERMS: Dict[str, str] = {
    "用户": "user",
    "名称": "name",
    "时间": "time",
    "状态": "status",
    "价格": "price",
    "数量": "quantity",
    "描述": "description",
    "创建": "create",
    "更新": "update",
    "删除": "delete",
    "是否": "is",
    "号": "number",
    "码": "code",
    "ID": "id",
    "邮箱": "email",
    "手机": "phone",
    "密码": "password",
    "姓名": "name",
    "地址": "address",
    "年龄": "age",
}

EN_ZH_TERMS: Dict[str, str] = {
    "user": "用户",
    "name": "名称",
    "time": "时间",
    "status": "状态",
    "price": "价格",
    "quantity": "数量",
    "description": "描述",
    "create": "创建",
    "update": "更新",
    "delete": "删除",
    "is": "是否",
    "number": "号",
    "code": "码",
    "id": "ID",
    "email": "邮箱",
    "phone": "手机",
    "password": "密码",
    "address": "地址",
    "age": "年龄",
}


class FallbackDictionaryTranslator:
    """
    Table-substitution translator for the ``zh``/``en`` pair.

    Always available and never raises.  Unsupported language pairs pass the
    text through unchanged.

    Example:
        >>> ft = FallbackDictionaryTranslator()
        >>> ft.translate("用户名称", "zh", "en")
        'username'
        >>> ft.translate("user status", "en", "zh")
        '用户 状态'
    """

    def __init__(self):
        self._tables: Dict[Tuple[Language, Language], Dict[str, str]] = {
            (Language.ZH, Language.EN): dict(ZH_EN_TERMS),
            (Language.EN, Language.ZH): dict(EN_ZH_TERMS),
        }

    def translate(
        self,
        text: str,
        from_lang: Union[Language, str],
        to_lang: Union[Language, str],
    ) -> str:
        """
        Replace every known term in *text*.

        Args:
            text: Text to translate.
            from_lang: Source language.
            to_lang: Target language.

        Returns:
            *text* with every table entry substituted, in table order.
        """
        table = self._tables.get((Language(from_lang), Language(to_lang)), {})

        result = text
        for source, target in table.items():
            result = re.sub(re.escape(source), lambda _m, t=target: t, result, flags=re.IGNORECASE)

        if result == text:
            logger.debug(f"Fallback dictionary found no known terms in {text!r}")
        return result

    def add_term(
        self,
        source: str,
        target: str,
        from_lang: Union[Language, str] = Language.ZH,
        to_lang: Union[Language, str] = Language.EN,
    ) -> None:
        """Add or replace one entry in the runtime table for a language pair."""
        key = (Language(from_lang), Language(to_lang))
        self._tables.setdefault(key, {})[source] = target

    def get_table(
        self,
        from_lang: Union[Language, str],
        to_lang: Union[Language, str],
    ) -> Dict[str, str]:
        """Return a copy of the table for a language pair."""
        return dict(self._tables.get((Language(from_lang), Language(to_lang)), {}))
