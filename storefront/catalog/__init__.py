from .router import router, get_catalog_store

def startup_catalog(store) -> None:
    # Read (or seed) the durable slot once; load() never raises
    store.load()
