# vibe_commerce/domain/errors.py


class CartError(Exception):
    """
    Bazowy blad domeny koszyka.
    kind - rodzaj bledu rozrozniany przez klienta, status_code - mapowanie na HTTP
    """

    kind = "CartError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class NotFoundError(CartError):
    kind = "NotFound"
    status_code = 404


class InvalidQuantityError(CartError):
    kind = "InvalidQuantity"
    status_code = 400


class CheckoutValidationError(CartError):
    kind = "ValidationError"
    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.field:
            data["field"] = self.field
        return data


class EmptyCartError(CartError):
    kind = "EmptyCart"
    status_code = 400


class StorageFailureError(CartError):
    kind = "StorageFailure"
    status_code = 500


class LockTimeoutError(StorageFailureError):
    status_code = 503
