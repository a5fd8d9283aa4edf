from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from ..recommendations.models import Menu

# Canonical dish name -> casual, misspelled or decorated forms people type.
SIMILAR_MENU_ALIASES: dict[str, list[str]] = {
    "김치찌개": ["김찌", "김치찌게", "김치찌깨", "김치 찌개", "김치찌개~"],
    "된장찌개": ["된찌", "된장찌게", "된장찌깨", "된장 찌개"],
    "제육볶음": ["제육", "제육복음", "제육볶음~", "제육볶"],
    "김치볶음밥": ["김볶", "김치볶음밥~", "김치 볶음밥", "김치볶음밥!"],
    "불고기": ["불고기~", "소불고기", "불고기정식"],
    "비빔밥": ["비빔밥~", "비빔", "비빔밥!"],
    "삼겹살": ["삼겹", "삼겹살구이", "삼겹살~"],
    "돈까스": ["돈가스", "돈까쓰", "돈카츠", "톤카츠", "돈까스~", "등심돈까스", "안심돈까스"],
    "짜장면": ["짜장", "자장면", "짜장면~", "짜장밥"],
    "짬뽕": ["짬뽕~", "짬뽕!"],
    "볶음밥": ["볶밥", "볶음밥~"],
    "라면": ["라면~", "라멘"],
    "우동": ["우동~", "우동면"],
    "초밥": ["초밥~", "스시", "스시~"],
    "삼계탕": ["삼계탕~", "삼게탕", "삼겨탕"],
    "냉면": ["냉면~", "랭면", "물냉면", "비빔냉면"],
    "부대찌개": ["부찌", "부대찌게", "부대찌깨"],
    "순두부찌개": ["순두부", "순두부찌게", "순찌"],
    "떡볶이": ["떡볶기", "떡볶이~", "떡볶", "떡복이"],
    "튀김": ["튀김~", "튀김!"],
    "만두": ["만두~", "군만두", "물만두", "찐만두"],
    "칼국수": ["칼국수~", "칼국", "칼국쑤"],
    "수제비": ["수제비~", "수제비!"],
    "김밥": ["김밥~", "김밥!"],
    "햄버거": ["햄버거~", "버거", "햄벅거", "함버거"],
    "피자": ["피자~", "피짜", "피자!"],
    "파스타": ["파스타~", "스파게티", "파스타!"],
    "샐러드": ["샐러드~", "사라다", "샐러드!"],
    "카레": ["카레~", "카레라이스", "카레!"],
    "오므라이스": ["오므라이스~", "오믈렛", "오므라이스!"],
    "치킨": ["치킨~", "후라이드", "양념치킨", "치킨!"],
    "족발": ["족발~", "족발!"],
    "보쌈": ["보쌈~", "보쌈!"],
    "갈비": ["갈비~", "소갈비", "돼지갈비", "갈비구이"],
    "갈비탕": ["갈비탕~", "갈비탕!"],
    "설렁탕": ["설렁탕~", "설렁탕!", "설농탕"],
    "곰탕": ["곰탕~", "곰탕!"],
    "육개장": ["육개장~", "육개장!"],
    "해장국": ["해장국~", "해장국!", "뼈해장국"],
    "감자탕": ["감자탕~", "감자탕!"],
    "닭갈비": ["닭갈비~", "닭갈비!", "춘천닭갈비"],
    "닭볶음탕": ["닭볶음탕~", "닭볶음탕!", "닭도리탕"],
    "쌀국수": ["쌀국수~", "포", "pho", "퍼"],
    "팟타이": ["팟타이~", "팟타이!", "패드타이"],
    "카오팟": ["카오팟~", "카오팟!"],
    "마라탕": ["마라탕~", "마라탕!", "마라샹궈"],
    "훠궈": ["훠궈~", "훠거", "훠꿔", "샤브샤브"],
    "탕수육": ["탕수육~", "탕수육!", "탕쑤육"],
    "깐풍기": ["깐풍기~", "깐풍기!", "깐퐁기"],
    "볶음면": ["볶음면~", "볶음면!"],
    "회": ["회~", "사시미", "회!"],
    "덮밥": ["덮밥~", "덮밥!"],
    "정식": ["정식~", "정식!"],
    "국밥": ["국밥~", "국밥!"],
}


class AliasTable:
    """Read-only lookup from alias text to a lowercased canonical display name.

    Static aliases go in first, catalog synonyms second, so a catalog synonym
    wins over a static alias spelled the same way.
    """

    def __init__(self, catalog: Iterable[Menu]) -> None:
        targets: dict[str, str] = {}
        for canonical, variants in SIMILAR_MENU_ALIASES.items():
            for variant in variants:
                targets[variant.lower()] = canonical.lower()
        for menu in catalog:
            for synonym in menu.synonyms:
                targets[synonym.lower()] = menu.display_name.lower()
        self._targets = MappingProxyType(targets)

    def lookup(self, text: str) -> str | None:
        return self._targets.get(text.strip().lower())

    @staticmethod
    def aliases_for(menu_name: str) -> list[str]:
        """Static aliases of every canonical name contained in *menu_name*."""
        aliases: list[str] = []
        for canonical, variants in SIMILAR_MENU_ALIASES.items():
            if canonical in menu_name:
                aliases.extend(variants)
        return aliases
