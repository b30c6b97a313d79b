from pydantic import BaseModel


class SalesStatistics(BaseModel):
    total_ventas: int
    cantidad_vendida: float
    ingresos_totales: float
    venta_promedio: float
    venta_maxima: float


class InventoryStatistics(BaseModel):
    total_productos: int
    disponibles: int
    vendidos: int
    agotados: int
    cantidad_total: float
    cantidad_disponible: float
    valor_inventario: float
