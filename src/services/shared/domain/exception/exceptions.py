class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ValidationException(DomainException):
    """入力値の検証エラー（ユーザーに項目単位で返す）"""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class DraftIncompleteException(ValidationException):
    """予約ドラフトが送信可能な状態ではない"""

    pass


class MissingFieldException(ValidationException):
    """支払い方法に必要な項目が未入力"""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}", field=field)


class InvalidRangeException(ValidationException):
    """日付範囲が不正（チェックアウト <= チェックイン など）"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class InvalidTransitionException(BusinessRuleViolationException):
    """予約ステータス・支払いステータスの不正な遷移"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータス・バージョンが期待値と異なる場合）"""

    pass


class SettlementCancelledException(DomainException):
    """決済完了前に申込みが破棄された"""

    pass


class PaymentDeclinedException(DomainException):
    """決済が拒否された（実決済ゲートウェイ用。同一試行での再送はしない）"""

    pass


class InfrastructureException(DomainException):
    """インフラ起因のエラー（同じ冪等キーで再試行可能）"""

    pass


class PersistenceException(InfrastructureException):
    """永続化ストアへの読み書きに失敗した"""

    pass


class SettlementTimeoutException(InfrastructureException):
    """決済オーソリが制限時間内に完了しなかった"""

    pass
