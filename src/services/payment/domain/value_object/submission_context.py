import threading


class SubmissionContext:
    """予約申込みの受付状態

    ユーザーが決済完了前に申込みを破棄した場合は cancel() される。
    破棄後に届いた決済結果から予約を作成してはならない。
    """

    def __init__(self) -> None:
        self._cancel_event = threading.Event()

    @property
    def cancel_event(self) -> threading.Event:
        return self._cancel_event

    @property
    def is_open(self) -> bool:
        return not self._cancel_event.is_set()

    def cancel(self) -> None:
        self._cancel_event.set()
