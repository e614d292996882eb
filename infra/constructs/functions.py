import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

SERVICE_NAME = "hotel-booking"
HOTEL_TIMEZONE = "Africa/Addis_Ababa"


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        common_layer: _lambda.LayerVersion,
    ) -> None:
        super().__init__(scope, id)

        # 決済の待ち時間（シミュレーション遅延 + タイムアウト）を含めて余裕を持たせる
        self.create_booking = self._create_function(
            "CreateBookingLambda",
            "services.booking.handlers.create.lambda_handler",
            table,
            common_layer,
            timeout=Duration.seconds(30),
            extra_environment={
                "SETTLEMENT_DELAY_SECONDS": "2",
                "SETTLEMENT_TIMEOUT_SECONDS": "10",
            },
        )

        self.update_booking = self._create_function(
            "UpdateBookingLambda",
            "services.booking.handlers.update.lambda_handler",
            table,
            common_layer,
        )

        self.list_bookings = self._create_function(
            "ListBookingsLambda",
            "services.booking.handlers.list_bookings.lambda_handler",
            table,
            common_layer,
        )

        self.payment_methods = self._create_function(
            "PaymentMethodsLambda",
            "services.payment.handlers.methods.lambda_handler",
            table,
            common_layer,
        )

        table.grant_read_write_data(self.create_booking)
        table.grant_read_write_data(self.update_booking)
        table.grant_read_data(self.list_bookings)

        self.all_functions = [
            self.create_booking,
            self.update_booking,
            self.list_bookings,
            self.payment_methods,
        ]

    def _create_function(
        self,
        id: str,
        handler: str,
        table: dynamodb.Table,
        common_layer: _lambda.LayerVersion,
        timeout: Duration | None = None,
        extra_environment: dict[str, str] | None = None,
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_14,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[common_layer],
            timeout=timeout or Duration.seconds(10),
            environment={
                "TABLE_NAME": table.table_name,
                "POWERTOOLS_SERVICE_NAME": SERVICE_NAME,
                "HOTEL_TIMEZONE": HOTEL_TIMEZONE,
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
                **(extra_environment or {}),
            },
        )
