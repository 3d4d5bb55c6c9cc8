import logging

from saral.config import settings
from saral.dependencies import get_store

logger = logging.getLogger(__name__)

def reset_store():
    """Remove every key of the configured namespace from the configured medium."""
    store = get_store()
    keys = store.keys()
    logger.info(f"Clearing {len(keys)} keys from namespace '{store.namespace}' ({settings.STORAGE_TYPE})...")
    store.clear()
    logger.info(f"Namespace '{store.namespace}' has been reset.")

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    confirm = input(f"This will DELETE ALL DATA in namespace '{settings.STORAGE_NAMESPACE}'. Are you sure? (y/n): ")
    if confirm.lower() == 'y':
        reset_store()
    else:
        print("Operation cancelled.")
