from dataclasses import dataclass
from typing import Dict

from vardecl.error.analysis_error import AnalysisException, DuplicateIdentifierError
from vardecl.error.communicator import Communicator
from vardecl.token import Token
from vardecl.tree.tree import DeclBlockNode


@dataclass
class DeclarationAnalyzer:
    """
    Build the symbol table of a declaration block:
    - Identifiers and type keywords are case insensitive, and stored in lower case.
    - Every identifier may be declared only once, repeated declarations raise
      a DuplicateIdentifierError pointing at both declarations.
    """

    program: str

    def analyze(self, tree: DeclBlockNode) -> Dict[str, str]:
        symbols: Dict[str, str] = {}
        declared: Dict[str, Token] = {}
        for line in tree.lines:
            for _id in line.ids:
                name = _id.text.lower()
                if name in declared:
                    DuplicateIdentifierError(self.program, _id.span, _id, declared[name])
                    continue
                declared[name] = _id
                symbols[name] = line.type.text.lower()

        Communicator.communicate(AnalysisException)
        return symbols
