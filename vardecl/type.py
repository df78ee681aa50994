from enum import Enum


class Type(Enum):
    COMMA = ","
    COLON = ":"
    SEMICOLON = ";"
    END = "#"
    VAR = "var"
    TYPE = "type"
    KEYWORD = "keyword"
    ID = "id"
    ERROR = "error"

    def __str__(self) -> str:
        match self:
            case Type.ID:
                return "identifier"
            case Type.TYPE:
                return "type"
            case Type.KEYWORD:
                return "reserved word"
            case Type.END:
                return "end of input"
            case Type.ERROR:
                return "error"
        return repr(self.value)

    def article_str(self) -> str:
        match self:
            case Type.ID | Type.END | Type.ERROR:
                return f"an {self}"
            case _:
                return f"a {self}"
