from vardecl.parser.analyze import DeclarationAnalyzer
from vardecl.parser.parser import Parser
from vardecl.scanner.scanner import Scanner
from vardecl.token import Token
from vardecl.type import Type


def check(program: str):
    """Scan, parse and analyze a declaration block.

    Returns:
        Tuple[List[Token], DeclBlockNode, Dict[str, str]]: The tokens, the tree and the
            symbol table mapping each identifier to its type.
    """
    tokens = Scanner(program).scan()
    tree = Parser(program).parse(tokens)
    symbols = DeclarationAnalyzer(program).analyze(tree)
    return tokens, tree, symbols
