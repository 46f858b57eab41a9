# DEPENDENCIES
from typing import List
from typing import Optional
from config.risk_rules import DocumentLanguage
from config.pipeline_config import PipelineConfig


ANALYSIS_HEADER       = "You are a legal contract risk analyzer. Analyze the following contract and extract these {count} key clauses:"

ANALYSIS_INSTRUCTIONS = """For each clause found in the contract:
1. Assess the risk level as "Low", "Medium", or "High" based on:
   - Unfavorable terms to the client
   - Ambiguity or lack of clarity
   - Missing protections
   - Unusual or onerous conditions

2. Provide a plain-English summary explaining the risk and what the clause means

3. Extract the exact original text of the clause from the contract

4. Suggest an improved redline version that reduces risk or adds clarity

If a clause is not found, you may omit it from the results.

After analyzing all found clauses, determine an overall risk level for the entire contract:
- "Low": Contract is generally favorable with minimal concerns
- "Medium": Some concerning clauses but manageable with negotiation
- "High": Significant risks that require substantial changes"""

OUTPUT_FORMAT         = """Return your analysis as a JSON object in this EXACT format:
{
  "overall_risk": "Low" | "Medium" | "High",
  "clauses": [
    {
      "name": "Clause Name",
      "risk_level": "Low" | "Medium" | "High",
      "summary": "Plain-English explanation of the clause and its risks",
      "original_text": "Exact clause text from the contract",
      "suggested_redline": "Improved version of the clause text"
    }
  ]
}"""

LANGUAGE_INSTRUCTIONS = {DocumentLanguage.ENGLISH : "The contract is written in English. Write every summary and redline in English.",
                         DocumentLanguage.HINDI   : ("The contract is written in Hindi (Devanagari script). Use the Hindi clause names listed above "
                                                     "for \"name\", write every summary and suggested redline in Hindi, and copy original_text "
                                                     "exactly as it appears. Keep \"risk_level\" and \"overall_risk\" in English (\"Low\", \"Medium\", \"High\")."),
                         DocumentLanguage.MIXED   : ("The contract mixes Hindi and English. Use the English clause names listed above for \"name\", "
                                                     "write summaries in English, copy original_text exactly as it appears in either script, and write "
                                                     "each suggested redline in the language of the original clause."),
                        }


class AnalysisPromptBuilder:
    """
    Builds the plain-text analysis prompt: instruction header, numbered clause vocabulary,
    output contract, language instructions and finally the verbatim contract text
    """
    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()


    def get_clause_names(self, language: DocumentLanguage) -> List[str]:
        return self.config.get_clause_names(language)


    def build(self, contract_text: str, language: DocumentLanguage = DocumentLanguage.ENGLISH) -> str:
        """
        Create the analysis prompt for one chunk

        Arguments:
        ----------
            contract_text     { str }        : Chunk text, appended verbatim at the end

            language    { DocumentLanguage } : Language detected for the whole document

        Returns:
        --------
                    { str }                  : Prompt text
        """
        clause_names = self.get_clause_names(language)
        vocabulary   = "\n".join(f"{index}. {name}" for index, name in enumerate(clause_names, start = 1))

        sections     = [ANALYSIS_HEADER.format(count = len(clause_names)),
                        vocabulary,
                        ANALYSIS_INSTRUCTIONS,
                        LANGUAGE_INSTRUCTIONS.get(language, LANGUAGE_INSTRUCTIONS[DocumentLanguage.ENGLISH]),
                        OUTPUT_FORMAT,
                        f"Contract text:\n{contract_text}",
                       ]

        return "\n\n".join(sections)
