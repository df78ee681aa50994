from vardecl.error.error import CompilerError, CompilerException


class ScannerException(CompilerException):
    pass


class ScannerError(CompilerError):
    def create_error(self, before: str, after=""):
        return super().create_error(before, class_name="ScannerError", after=after)


class UnexpectedCharacterError(ScannerError):
    def __str__(self) -> str:
        multiple_unexpected_chars = self.span.end_col - self.span.start_col > 1
        return self.create_error(
            f"Unexpected character{'s' if multiple_unexpected_chars else ''} {self.error_chars!r} on {self.span.lines_str}."
        )


class DanglingMultiLineCommentError(ScannerError):
    def __str__(self) -> str:
        return self.create_error(
            f"Found dangling multiline comment on {self.span.lines_str}."
        )
