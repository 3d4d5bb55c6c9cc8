"""
Saral core: project configuration management

Directory Structure:
├── domain/            # Entities, validation predicates, errors, events
│   └── entities.py    # Project, sources, sinks, capture config (pydantic)
├── application/       # Services orchestrating domain + storage
│   └── project_service.py  # CRUD over the persisted project collection
├── storage/           # Key-value mediums and the namespaced store
│   ├── memory.py      # In-process dict
│   ├── filesystem.py  # Single JSON file
│   └── s3.py          # One S3 object per key
├── util/              # Ids, timestamps, cloning
├── dependencies.py    # Explicit wiring of store and service
└── config.py          # Application configuration

Every service mutation rewrites the whole project list under one key of a
namespaced store. Nothing is shared process-wide: build stores and services
through saral.dependencies or construct them directly.
"""
