# DEPENDENCIES
from enum import Enum
from typing import Dict
from typing import List
from typing import Optional


class RiskLevel(Enum):
    LOW    = "Low"
    MEDIUM = "Medium"
    HIGH   = "High"


class DocumentLanguage(Enum):
    ENGLISH = "english"
    HINDI   = "hindi"
    MIXED   = "mixed"


class RiskRules:
    """
    Risk ordering and clause vocabularies shared by the prompt builder and the merge engine
    """
    # Unknown or missing risk values rank below Low
    RISK_PRIORITY   = {RiskLevel.HIGH.value   : 3,
                       RiskLevel.MEDIUM.value : 2,
                       RiskLevel.LOW.value    : 1,
                      }

    ENGLISH_CLAUSES = ["Term",
                       "Termination",
                       "Indemnity",
                       "Limitation of Liability",
                       "Confidentiality",
                       "IP Ownership",
                       "Governing Law",
                       "Data Privacy",
                       "Insurance",
                       "Payment Terms",
                      ]

    HINDI_CLAUSES   = {"Term"                    : "अवधि",
                       "Termination"             : "समाप्ति",
                       "Indemnity"               : "क्षतिपूर्ति",
                       "Limitation of Liability" : "दायित्व की सीमा",
                       "Confidentiality"         : "गोपनीयता",
                       "IP Ownership"            : "बौद्धिक संपदा स्वामित्व",
                       "Governing Law"           : "शासी कानून",
                       "Data Privacy"            : "डेटा गोपनीयता",
                       "Insurance"               : "बीमा",
                       "Payment Terms"           : "भुगतान शर्तें",
                      }


    @classmethod
    def get_risk_priority(cls, risk: Optional[str]) -> int:
        """
        Numeric priority of a risk value (higher = riskier, 0 for anything unrecognised)
        """
        if isinstance(risk, RiskLevel):
            risk = risk.value

        return cls.RISK_PRIORITY.get(risk, 0)


    @classmethod
    def normalize_risk(cls, risk: Optional[str], default: str = RiskLevel.LOW.value) -> str:
        """
        Document-level risk restricted to the known levels; anything else becomes `default`
        """
        if isinstance(risk, RiskLevel):
            return risk.value

        return risk if risk in cls.RISK_PRIORITY else default


    @classmethod
    def highest_risk(cls, risks: List[Optional[str]], default: str = RiskLevel.LOW.value) -> str:
        """
        Maximum risk by priority; earlier values win ties and missing values fall back to default
        """
        highest = default

        for risk in risks:
            candidate = risk or default

            if (cls.get_risk_priority(candidate) > cls.get_risk_priority(highest)):
                highest = candidate

        return highest


    @classmethod
    def get_clause_names(cls, language: DocumentLanguage) -> List[str]:
        """
        Clause vocabulary for a detected language; mixed documents use the English names
        """
        if (language == DocumentLanguage.HINDI):
            return list(cls.HINDI_CLAUSES.values())

        return list(cls.ENGLISH_CLAUSES)


    @classmethod
    def get_vocabularies(cls) -> Dict[str, List[str]]:
        return {language.value: cls.get_clause_names(language) for language in DocumentLanguage}
