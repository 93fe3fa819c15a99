class BigPrimeError(Exception):
    def __init__(self, message: str):
        super().__init__(f"bigprime: {message}")


class DivisionByZero(BigPrimeError, ZeroDivisionError):
    def __init__(self, op: str = "division"):
        self.op = op
        super().__init__(f"{op} by zero")


class ZeroModulus(BigPrimeError, ZeroDivisionError):
    def __init__(self):
        super().__init__("modular exponentiation with zero modulus")


class MalformedNumericParse(BigPrimeError, ValueError):
    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"cannot parse {text!r} as a decimal value: {reason}")
