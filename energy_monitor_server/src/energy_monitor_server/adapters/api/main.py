from fastapi import FastAPI

from energy_monitor_server.adapters.api.routes import router

app = FastAPI(title="Energy Monitor")
app.include_router(router)
