import logging

import uvicorn
from fastapi import FastAPI

from bulkorder.api.routes import bulk_order
from bulkorder.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL

# Logging
logger = logging.getLogger("bulkorder_app")

# Initialize FastAPI app
app = FastAPI(title="Bulk Order Estimator API")

# Include routers
app.include_router(bulk_order.router)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print(f"Uvicorn running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
