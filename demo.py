from parser_generator.report import format_sets
from vardecl import DeclarationAnalyzer, Parser, Scanner
from vardecl.grammar import load_grammar
from tests.test_util import data_file, open_file

# Load a program string
program = open_file(data_file("valid", "comments.decl"))

program = """
var a, b : integer;
    total : real; // running sum
    done : bool;
"""

# Print the sets and the LL(1) verdict of the declaration grammar
grammar = load_grammar()
print("=" * 25)
print("Grammar:")
print("=" * 25)
print(grammar)
print()
print(format_sets(grammar.analysis))
print(f"\nParse table entries: {len(grammar.table)}")

# Perform scanning on the input program
scanner = Scanner(program)
tokens = scanner.scan()

# Perform parsing on the scanned tokens
parser = Parser(program)
tree = parser.parse(tokens)

# Build the symbol table from the tree
analyzer = DeclarationAnalyzer(program)
symbols = analyzer.analyze(tree)

# Print out the pretty printed tree
print("=" * 25)
print("Program:")
print("=" * 25)
print(tree)

print("=" * 25)
print("Declarations:")
print("=" * 25)
for identifier, _type in symbols.items():
    print(f"{identifier} : {_type}")

# The grammar can also be used directly on terminal names
result = grammar.parser().parse("Var i , i : t ; #".split())
print("=" * 25)
print("Leftmost derivation:")
print("=" * 25)
print("\n".join(str(production) for production in result.derivation))
