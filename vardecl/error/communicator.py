from typing import List

from vardecl.util import Colors, Span

# At most this many errors are shown at once
MAX_ERRORS = 10


class Communicator:
    """Render errors as the offending source lines, and raise them per checking stage."""

    @staticmethod
    def create_message(
        program: str,
        span: Span,
        class_name="CompilerError",
        before: str = "",
        after: str = "",
        n_before: int = 1,
        n_after: int = 1,
        color=Colors.RED,
    ) -> str:
        """Create a message that shows the lines around `span`, e.g.:

            SyntaxError: Unexpected token while parsing a declaration on line [2].
               1. var a : integer;
            -> 2.     b , : real;
            Expected an identifier, but got ':' instead on line [2] column 9.

        The lines within the span are marked with an arrow, and the span itself is colored.
        """
        lines = program.splitlines()
        first_ln = max(1, span.start_ln - n_before)
        last_ln = min(len(lines), span.end_ln + n_after)
        # Right-align the line numbers
        width = len(str(last_ln))

        rendered = []
        for line_no in range(first_ln, last_ln + 1):
            line = lines[line_no - 1]
            if span.start_ln <= line_no <= span.end_ln:
                prefix = f"-> {line_no:>{width}}. "
                rendered.append(prefix + Communicator.color_line(line, line_no, span, color))
            else:
                rendered.append(f"   {line_no:>{width}}. {line}")

        message = f"{class_name}: {before}\n" + "\n".join(rendered)
        if after:
            message += "\n" + after
        return message

    @staticmethod
    def color_line(line: str, line_no: int, span: Span, color: str) -> str:
        # Columns before the start and after the end of the span keep their color
        start = span.start_col if line_no == span.start_ln else 0
        end = span.end_col if line_no == span.end_ln else len(line)
        return f"{line[:start]}{color}{line[start:end]}{Colors.ENDC}{line[end:]}"

    @staticmethod
    def communicate(stage_of_exception) -> None:
        """Raise `stage_of_exception` with all accumulated errors, if there are any."""
        errors = ErrorRaiser.combine_errors()
        if not errors:
            return

        message = "".join("\n\n" + str(error) for error in errors[:MAX_ERRORS])
        if len(errors) > MAX_ERRORS:
            omitted = len(errors) - MAX_ERRORS
            message += f"\n\nShowing {MAX_ERRORS} errors, omitting {omitted} error{'s' if omitted > 1 else ''}..."

        ErrorRaiser.ERRORS.clear()
        raise stage_of_exception(message)


class ErrorRaiser:
    # Errors register themselves here when they are created
    ERRORS = []

    @staticmethod
    def combine_errors() -> List:
        """Sort the errors by position, and merge directly adjacent unexpected characters
        on the same line into a single error.
        """
        from vardecl.error.scanner_error import UnexpectedCharacterError

        ErrorRaiser.ERRORS.sort(
            key=lambda error: (error.span.start_ln, error.span.start_col)
        )

        combined = []
        for error in ErrorRaiser.ERRORS:
            previous = combined[-1] if combined else None
            if (
                isinstance(previous, UnexpectedCharacterError)
                and isinstance(error, UnexpectedCharacterError)
                and previous.span.end_ln == error.span.start_ln
                and previous.span.end_col == error.span.start_col
            ):
                previous.span = previous.span & error.span
                continue
            combined.append(error)

        ErrorRaiser.ERRORS[:] = combined
        return combined
