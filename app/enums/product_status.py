from enum import Enum

class ProductStatus(str, Enum):
    draft = "Draft"
    published = "Published"


class StockStatus(str, Enum):
    in_stock = "In Stock"
    out_of_stock = "Out of Stock"
