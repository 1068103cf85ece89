# product_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Product Service (dev mock)")


PRODUCTS = {
    "keyboard-01": {"id": "keyboard-01", "name": "Keyboard", "category": "Electronics", "cost": 199.99, "rating": 4},
    "mouse-01": {"id": "mouse-01", "name": "Mouse", "category": "Electronics", "cost": 49.50, "rating": 5},
    "monitor-01": {"id": "monitor-01", "name": "Monitor", "category": "Electronics", "cost": 899.00, "rating": 4},
}


@app.get("/products/{product_id}")
def get_product(product_id: str):
    product = PRODUCTS.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
