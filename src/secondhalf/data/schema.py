"""
Schema for the first-half match statistics entered in the form.
"""

from __future__ import annotations

from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Values come straight from form inputs; nothing is validated at this layer.
StatValue = Union[str, int, float]


class MatchRecord(BaseModel):
    """One match's first-half statistics. Empty string means "not entered"."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    # identity
    league: StatValue = ""
    date: StatValue = ""
    home_team: StatValue = ""
    away_team: StatValue = ""

    # score / expected goals
    first_half_score: StatValue = ""
    home_xg: StatValue = Field(default="", alias="homeXG")
    away_xg: StatValue = Field(default="", alias="awayXG")
    home_big_chances: StatValue = ""
    away_big_chances: StatValue = ""

    # shooting
    home_shots: StatValue = ""
    away_shots: StatValue = ""
    home_shots_inside_box: StatValue = ""
    away_shots_inside_box: StatValue = ""
    home_on_target: StatValue = ""
    away_on_target: StatValue = ""
    home_blocked_shots: StatValue = ""
    away_blocked_shots: StatValue = ""

    # possession / passing
    home_possession: StatValue = ""
    away_possession: StatValue = ""
    home_passes: StatValue = ""
    away_passes: StatValue = ""
    home_tackles: StatValue = ""
    away_tackles: StatValue = ""

    # set-pieces / discipline
    home_corners: StatValue = ""
    away_corners: StatValue = ""
    home_yellow: StatValue = ""
    away_yellow: StatValue = ""
    home_red: StatValue = ""
    away_red: StatValue = ""
    home_fouls: StatValue = ""
    away_fouls: StatValue = ""

    # commentary
    live_commentary: StatValue = ""

    @field_validator("*", mode="before")
    @classmethod
    def null_is_empty(cls, value):
        return "" if value is None else value

    @property
    def teams_label(self) -> str:
        return f"{self.home_team} vs {self.away_team}"


MATCH_RECORD_FIELDS: List[str] = list(MatchRecord.model_fields)


def get_match_record_labels() -> Dict[str, str]:
    """
    Return the Turkish form label for every Match Record field.

    Returns
    -------
    Dict[str, str]
        Mapping from field name to label, in declaration order.
    """
    return {
        "league": "Lig",
        "date": "Tarih",
        "home_team": "Ev Sahibi",
        "away_team": "Deplasman",
        "first_half_score": "İlk Yarı Skoru",
        "home_xg": "xG (Ev)",
        "away_xg": "xG (Dep)",
        "home_big_chances": "Büyük Şans (Ev)",
        "away_big_chances": "Büyük Şans (Dep)",
        "home_shots": "Şutlar (Ev)",
        "away_shots": "Şutlar (Dep)",
        "home_shots_inside_box": "Ceza Sahası İçi Şut (Ev)",
        "away_shots_inside_box": "Ceza Sahası İçi Şut (Dep)",
        "home_on_target": "İsabetli Şut (Ev)",
        "away_on_target": "İsabetli Şut (Dep)",
        "home_blocked_shots": "Bloke Edilen Şut (Ev)",
        "away_blocked_shots": "Bloke Edilen Şut (Dep)",
        "home_possession": "Top Hakimiyeti % (Ev)",
        "away_possession": "Top Hakimiyeti % (Dep)",
        "home_passes": "Paslar (Ev)",
        "away_passes": "Paslar (Dep)",
        "home_tackles": "Müdahaleler (Ev)",
        "away_tackles": "Müdahaleler (Dep)",
        "home_corners": "Kornerler (Ev)",
        "away_corners": "Kornerler (Dep)",
        "home_yellow": "Sarı Kart (Ev)",
        "away_yellow": "Sarı Kart (Dep)",
        "home_red": "Kırmızı Kart (Ev)",
        "away_red": "Kırmızı Kart (Dep)",
        "home_fouls": "Fauller (Ev)",
        "away_fouls": "Fauller (Dep)",
        "live_commentary": "Maç Anlatımı",
    }
