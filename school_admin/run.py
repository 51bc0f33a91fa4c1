import uvicorn
from school_admin import create_app
from school_admin.core.config import settings

# Create the FastAPI app using the create_app function
app = create_app()

# List all routes (endpoints), only exposed in debug mode
if settings.DEBUG:
    @app.get("/list-endpoints", include_in_schema=False)
    def list_endpoints():
        endpoints = []
        for route in app.router.routes:
            endpoints.append({
                "path": route.path,
                "name": route.name,
                "methods": sorted(getattr(route, "methods", None) or [])
            })
        return {"endpoints": endpoints}

def main():
    uvicorn.run("school_admin.run:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)

if __name__ == "__main__":
    main()
