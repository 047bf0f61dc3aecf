class OutputViewError(Exception):
    """
    Base class for errors raised while rendering an output view. Every
    error is recoverable from the host's point of view: it is shown inline
    next to the output instead of failing the request.
    """

    code = "output_view_error"

    def todict(self):
        return dict(code=self.code, msg=str(self))


class ValidationError(OutputViewError):
    code = "invalid_parameter"

    def __init__(self, field, msg, *args):
        self.field = field
        super().__init__(f"{field}: {msg}", *args)

    def todict(self):
        return dict(code=self.code, field=self.field, msg=str(self))


class UnknownParameterError(OutputViewError):
    code = "unknown_parameter"

    def __init__(self, names, *args):
        self.names = sorted(names)
        msg = args[0] if args else f"Unknown parameter(s): {', '.join(self.names)}"
        super().__init__(msg)

    def todict(self):
        return dict(code=self.code, names=self.names, msg=str(self))


class TypeMismatchError(OutputViewError):
    code = "type_mismatch"

    def __init__(self, name, expected, value, *args):
        self.name = name
        self.expected = expected
        self.value = value
        msg = args[0] if args else f"{name}: expected {expected}, got {value!r}"
        super().__init__(msg)

    def todict(self):
        return dict(
            code=self.code, name=self.name, expected=str(self.expected), msg=str(self)
        )


class IncompleteResultError(OutputViewError):
    code = "incomplete_result"

    def __init__(self, display_type, fields, *args):
        self.display_type = display_type
        self.fields = list(fields)
        msg = args[0] if args else (
            f"{display_type} result is missing or has invalid fields: "
            f"{', '.join(self.fields)}"
        )
        super().__init__(msg)

    def todict(self):
        return dict(
            code=self.code,
            display_type=str(self.display_type),
            fields=self.fields,
            msg=str(self),
        )


class ProviderError(OutputViewError):
    code = "provider_error"


class ProviderNotFound(ProviderError):
    code = "provider_not_found"

    def __init__(self, label, *args):
        self.label = label
        msg = args[0] if args else f"No output view provider named '{label}'"
        super().__init__(msg)
