KIND_ROLL = "rollo"
KIND_BOOK = "libro"
KIND_COFFEE = "cafe"
PRODUCT_KINDS = (KIND_ROLL, KIND_BOOK, KIND_COFFEE)

STATUS_AVAILABLE = "disponible"
STATUS_SOLD = "vendido"
STATUS_DEPLETED = "agotado"
PRODUCT_STATUSES = (STATUS_AVAILABLE, STATUS_SOLD, STATUS_DEPLETED)

HISTORY_CREATED = "Registrado"
HISTORY_UPDATED = "Actualizado"
HISTORY_SALE = "Venta realizada"

API_VERSION = "2.0.0"

KIND_LABELS = {
    KIND_ROLL: "Rollo",
    KIND_BOOK: "Libro",
    KIND_COFFEE: "Café",
}
