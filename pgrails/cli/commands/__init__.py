from . import (
    create,
    drop,
    dump,
    edit,
    fresh,
    import_archive,
    migrate,
    remigrate,
    restore,
    seed,
)
