import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from tableinfo.core.database import engine
from tableinfo.api.router import api_router

logging.basicConfig(level=logging.INFO)


# Close the engine once everything is done
@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await engine.dispose()


app = FastAPI(title="Table Info API", lifespan=lifespan)

# Include the master router containing all our endpoints
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Welcome to the Table Info API"}
