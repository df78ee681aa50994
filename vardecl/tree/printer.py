from vardecl.tree.tree import DeclBlockNode, DeclLineNode, Node

INDENT = " " * 4


class Printer:
    """Pretty print a declaration tree as canonical source code.

    The first declaration follows the `var` keyword, every other declaration gets a
    line of its own, aligned with the first:

        var a, b : integer;
            c : real;
    """

    def print(self, node: Node) -> str:
        match node:
            case DeclBlockNode(lines=[]):
                return ""
            case DeclBlockNode(lines=[first, *rest]):
                output = ["var " + self.print(first)]
                output += [INDENT + self.print(line) for line in rest]
                return "\n".join(output)
            case DeclLineNode():
                ids = ", ".join(str(_id) for _id in node.ids)
                return f"{ids} : {node.type};"
        raise Exception(f"Can not print {type(node).__name__}.")
