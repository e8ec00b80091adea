# Development server for the parameter store using the seeded in-memory backend
from paramstore_lib.main import create_app, Config
app = create_app(Config(storage_backend='memory', seed_demo_data=True))
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5500)
