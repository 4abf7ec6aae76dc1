"""ログプレフィックス定数."""


class LogPrefix:
    """ロギング用プレフィックス定数."""

    BATCH_JOB = "[BATCH_JOB]"
    CREATE_COMPANY = "[CREATE_COMPANY]"
    UPDATE_COMPANY = "[UPDATE_COMPANY]"
    PATCH_COMPANY = "[PATCH_COMPANY]"
    DELETE_COMPANY = "[DELETE_COMPANY]"
    IMPORT_COMPANY = "[IMPORT_COMPANY]"
