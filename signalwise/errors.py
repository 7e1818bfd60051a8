from typing import Any, Iterable


class SignalwiseError(Exception): ...


class MalformedTypeTagError(SignalwiseError):
    def __init__(self, type_tag: Any):
        self.type_tag = type_tag
        super().__init__(
            f"type tag {type_tag!r} is malformed, expected `<namespace>:<name>`"
        )


class MissingRequiredFieldError(SignalwiseError):
    def __init__(self, key: str, type_tag: str | None = None):
        self.key = key
        self.type_tag = type_tag
        msg = f"required field `{key}` is missing"
        if type_tag:
            msg += f" in json of {type_tag}"
        super().__init__(msg)


class InvalidFieldValueError(SignalwiseError):
    def __init__(self, key: str, value: Any, reason: str):
        self.key = key
        self.value = value
        super().__init__(f"value {value!r} of field `{key}` is invalid: {reason}")


class TypeMismatchError(SignalwiseError):
    def __init__(self, expected: str, actual: Any):
        self.expected = expected
        self.actual = actual
        super().__init__(f"type {actual!r} does not match expected type {expected!r}")


class UnknownTypeError(SignalwiseError):
    def __init__(self, type_tag: str, registry_name: str = "registry"):
        self.type_tag = type_tag
        super().__init__(f"type {type_tag!r} is not registered in {registry_name}")


class DuplicateTypeError(SignalwiseError):
    def __init__(self, type_tag: str):
        self.type_tag = type_tag
        super().__init__(f"type {type_tag!r} is already registered")


class RegistryFrozenError(SignalwiseError):
    def __init__(self, registry_name: str):
        super().__init__(f"{registry_name} is already built, no more registration")


class UnsupportedSchemaVersionError(SignalwiseError):
    def __init__(self, version: Any, supported: Iterable[Any], type_tag: str):
        self.version = version
        self.supported = frozenset(supported)
        versions = ", ".join(sorted(str(v) for v in self.supported))
        super().__init__(
            f"{type_tag} does not support schema version {version}, supported: {versions}"
        )


class UnsupportedMutationError(SignalwiseError):
    def __init__(self, operation: str, target: Any):
        super().__init__(f"`{operation}` is not supported on {target}")


class HttpStatusOutOfRangeError(SignalwiseError):
    def __init__(self, status: Any):
        self.status = status
        super().__init__(f"{status!r} is not within the range of http status codes")


class InvalidHttpStatusError(SignalwiseError):
    def __init__(self, status: int, allowed: Iterable[int], type_tag: str):
        self.status = status
        self.allowed = frozenset(allowed)
        codes = ", ".join(str(s) for s in sorted(self.allowed))
        super().__init__(f"status {status} is invalid for {type_tag}, expected one of {codes}")


class InvalidHeaderValueError(SignalwiseError):
    def __init__(self, key: str, value: str, expected: str):
        self.key = key
        self.value = value
        super().__init__(f"header `{key}` with value {value!r} is not a valid {expected}")


class EnvelopeDecodeError(SignalwiseError):
    def __init__(self, manifest: str, reason: str):
        self.manifest = manifest
        super().__init__(f"failed to decode envelope of {manifest}: {reason}")
