from __future__ import annotations

from enum import StrEnum


class YesNo(StrEnum):
    NO = "Não"
    YES = "Sim"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class ReferralSource(StrEnum):
    DOCTOR = "Outro médico"
    RELATIVE_OR_FRIEND = "Parente ou amigo"
    OTHER = "Outros"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class SnoringFrequency(StrEnum):
    OCCASIONAL = "Ocasional"
    FREQUENT = "Frequente"
    EVERY_NIGHT = "Todas as noites"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class SmokeType(StrEnum):
    CIGARETTE = "Cigarro"
    CIGAR = "Charuto"
    PIPE = "Cachimbo"
    OTHER = "Outros"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class AlcoholType(StrEnum):
    BEER = "Cerveja"
    WINE = "Vinho"
    SPIRITS = "Destilados (cachaça, whisky, vodka)"
    LIQUEUR = "Licores"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class AlcoholConsumption(StrEnum):
    SOCIAL = "Social/Ocasional"
    MODERATE = "Moderado"
    EXCESSIVE = "Excessivo"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class WeeklyFrequency(StrEnum):
    ONE_TWO = "1-2 vezes"
    THREE_FOUR = "3-4 vezes"
    FIVE_PLUS = "5 ou mais"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class WeeklyTotalTime(StrEnum):
    UNDER_150 = "Menos de 150 min"
    FROM_150_TO_300 = "150-300 min"
    OVER_300 = "Mais de 300 min"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class DietType(StrEnum):
    OMNIVORE = "Onívora"
    VEGETARIAN = "Vegetariana"
    VEGAN = "Vegana"
    OTHER_RESTRICTIONS = "Outras restrições"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class CovidDoses(StrEnum):
    ONE = "1"
    TWO = "2"
    THREE_PLUS = "3 ou mais"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


FATHER_STATUS = ("Vivo", "Falecido")
MOTHER_STATUS = ("Viva", "Falecida")
GRANDPARENTS_STATUS = ("Vivos", "Falecidos")

EPWORTH_SCORE_MIN = 0
EPWORTH_SCORE_MAX = 3
EPWORTH_EXCESSIVE_THRESHOLD = 10
CIGARETTES_PER_PACK = 20
