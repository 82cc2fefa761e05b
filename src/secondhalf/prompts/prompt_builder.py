"""
Prompt construction for second-half predictions.

Turns a Match Record into the text sent to the generative-language endpoint
and wraps it into the request body. Everything here is pure: the same record
always produces byte-identical output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from secondhalf.config import MAX_OUTPUT_TOKENS, TEMPERATURE, TOP_K, TOP_P
from secondhalf.data.schema import MatchRecord

# (label, fields). One field renders as "label: value", a home/away pair as
# "label (Ev/Dep): home-away".
StatLine = Tuple[str, Tuple[str, ...]]

PROMPT_SECTIONS: Tuple[Tuple[str, Tuple[StatLine, ...]], ...] = (
    (
        "Maç Bilgileri",
        (
            ("Lig", ("league",)),
            ("Tarih", ("date",)),
            ("Ev Sahibi", ("home_team",)),
            ("Deplasman", ("away_team",)),
        ),
    ),
    (
        "Skor ve Beklenen Goller (İlk Yarı)",
        (
            ("İlk Yarı Skoru", ("first_half_score",)),
            ("xG", ("home_xg", "away_xg")),
            ("Büyük Şans", ("home_big_chances", "away_big_chances")),
        ),
    ),
    (
        "Şut İstatistikleri (İlk Yarı)",
        (
            ("Şutlar", ("home_shots", "away_shots")),
            ("Ceza Sahası İçi Şut", ("home_shots_inside_box", "away_shots_inside_box")),
            ("İsabetli Şutlar", ("home_on_target", "away_on_target")),
            ("Bloke Edilen Şutlar", ("home_blocked_shots", "away_blocked_shots")),
        ),
    ),
    (
        "Top Hakimiyeti ve Paslar (İlk Yarı)",
        (
            ("Top Hakimiyeti %", ("home_possession", "away_possession")),
            ("Paslar", ("home_passes", "away_passes")),
            ("Müdahaleler", ("home_tackles", "away_tackles")),
        ),
    ),
    (
        "Duran Toplar ve Disiplin (İlk Yarı)",
        (
            ("Kornerler", ("home_corners", "away_corners")),
            ("Sarı Kartlar", ("home_yellow", "away_yellow")),
            ("Kırmızı Kartlar", ("home_red", "away_red")),
            ("Fauller", ("home_fouls", "away_fouls")),
        ),
    ),
    (
        "Maç Anlatımı",
        (("", ("live_commentary",)),),
    ),
)

INSTRUCTIONS: str = """\
Bu maçın ilk yarısı tamamlanmıştır ve aşağıdaki istatistikler yalnızca ilk yarıya aittir. \
İkinci yarı için aşağıdaki bahis türlerini analiz et ve en mantıklı tahminleri yap:

1. Maç Sonucu (1-0-2)
2. İkinci Yarı Gol Sayısı Alt/Üst bahisleri (0.5, 1.5, 2.5)
3. Toplam Gol Sayısı (mevcut ilk yarı skoru üzerine)
4. İkinci Yarıda Karşılıklı Gol (Var/Yok)
5. İkinci Yarı Korner Alt/Üst
6. İkinci Yarı Kart Alt/Üst
7. Handikaplı Maç Sonucu

ÖNEMLİ NOTLAR:
- Maç verilerinde verilen ilk yarı skoru başlangıç noktasıdır. İkinci yarı ve maç sonu tahminleri bu skor üzerine yapılmalıdır.
- Toplam gol bahisleri için ilk yarıdaki golleri hesaba katmayı unutma.
- Sadece mantıklı ve mümkün olan bahis seçeneklerini öner.
- Her tahmin için güven derecesi belirt (düşük/orta/yüksek) ve seçiminin gerekçelerini açıkla."""


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters attached to every request."""

    temperature: float = TEMPERATURE
    top_k: int = TOP_K
    top_p: float = TOP_P
    max_output_tokens: int = MAX_OUTPUT_TOKENS

    def to_payload(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }


def _format_value(value: Any) -> str:
    return "" if value is None else str(value)


def _render_line(record: MatchRecord, label: str, fields: Tuple[str, ...]) -> str:
    values = [_format_value(getattr(record, name)) for name in fields]
    if len(fields) == 2:
        return f"{label} (Ev/Dep): {values[0]}-{values[1]}"
    if not label:
        return values[0]
    return f"{label}: {values[0]}"


def render_match_data(record: MatchRecord) -> str:
    """
    Serialize every Match Record field under its Turkish section header.

    Parameters
    ----------
    record : MatchRecord
        Statistics entered in the form; empty values are kept as empty text.

    Returns
    -------
    str
        Multi-line match data block.
    """
    blocks: List[str] = []
    for header, lines in PROMPT_SECTIONS:
        rendered = [_render_line(record, label, fields) for label, fields in lines]
        blocks.append("\n".join([f"{header}:"] + rendered))
    return "\n\n".join(blocks)


def build_prompt(record: MatchRecord) -> str:
    """Return the instructions followed by the match data block."""
    return f"{INSTRUCTIONS}\n\nMaç Verileri:\n\n{render_match_data(record)}\n"


def build_request_body(
    record: MatchRecord,
    params: GenerationParams | None = None,
) -> Dict[str, Any]:
    """
    Build the ``generateContent`` request body for one submission.

    Parameters
    ----------
    record : MatchRecord
        Statistics entered in the form.
    params : GenerationParams | None
        Sampling parameters. Defaults come from config.

    Returns
    -------
    Dict[str, Any]
        ``{"contents": [...], "generationConfig": {...}}``
    """
    params = params or GenerationParams()
    return {
        "contents": [{"parts": [{"text": build_prompt(record)}]}],
        "generationConfig": params.to_payload(),
    }
