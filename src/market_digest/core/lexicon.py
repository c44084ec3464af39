"""Fixed word lists used by the bullet formatter and the signal extractor.

Kept as plain data so they can be overridden from ``config.yaml``.
"""

ALERT_GLYPHS: list[str] = ["🚨", "📌", "ℹ️", "ℹ", "⭐"]

# (opening, closing) pairs wrapping outlet/media tags
OUTLET_TAG_BRACKETS: list[tuple[str, str]] = [
    ("《", "》"),
    ("【", "】"),
    ("〈", "〉"),
]

ANALYST_SURNAMES: str = (
    "趙李王張陳劉楊黃周吳徐孫馬朱胡郭何高林羅鄭梁謝宋唐許韓馮鄧曹彭曾蕭田董袁潘于蔣蔡余杜葉程"
    "蘇魏呂丁任沈姚盧姜崔鐘譚陸汪范金石廖賈夏韋付方白鄒孟熊秦邱江尹薛閻段雷侯龍史陶黎賀顧毛郝"
    "龔邵萬錢嚴覃武戴莫孔向湯"
)

EMOTIVE_VERBS: dict[str, str] = {
    "暴跌": "下跌",
    "暴漲": "上漲",
    "飆升": "上升",
    "崩盤": "下跌",
    "大漲": "上漲",
    "大跌": "下跌",
    "狂飆": "上漲",
    "重挫": "下跌",
    "慘跌": "下跌",
}

CLICKBAIT_TERMS: list[str] = [
    "爆料", "驚爆", "獨家", "秘密", "必看", "必買",
    "曝光", "揭秘", "震撼", "重磅",
]

THEME_KEYWORDS: list[str] = ["AI", "台積電", "Fed", "CPI", "通膨", "降息", "美股"]

# Theme groups consulted by the impact classifier
AI_THEME = "AI"
AI_MIN_MENTIONS = 2
POLICY_THEMES: tuple[str, ...] = ("Fed", "CPI")
INDEX_WEIGHT_THEMES: tuple[str, ...] = ("台積電",)
