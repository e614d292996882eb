from aws_cdk import Duration
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_lambda as _lambda
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct


class Api(Construct):
    """API Gateway Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        create_booking: _lambda.Function,
        update_booking: _lambda.Function,
        list_bookings: _lambda.Function,
        payment_methods: _lambda.Function,
        common_layer: _lambda.LayerVersion,
        staff_key_secret: secretsmanager.ISecret,
    ) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "BookingRestApi",
            rest_api_name="Hotel Booking API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=20,
                throttling_rate_limit=10,
            ),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_headers=["Content-Type", "x-staff-key", "x-staff-id"],
            ),
        )

        # Lambda Authorizer: x-staff-key ヘッダーでスタッフ/ゲストを判定
        authorizer_fn = _lambda.Function(
            self,
            "StaffKeyAuthorizerFn",
            runtime=_lambda.Runtime.PYTHON_3_14,
            handler="authorizer.handler.lambda_handler",
            code=_lambda.Code.from_asset("src"),
            layers=[common_layer],
            environment={
                "STAFF_KEY_SECRET_ARN": staff_key_secret.secret_arn,
                "POWERTOOLS_SERVICE_NAME": "hotel-booking-authorizer",
            },
        )
        staff_key_secret.grant_read(authorizer_fn)

        # identity source を宣言するとヘッダー無しのリクエストは Authorizer を呼ばずに 401 になる。
        # ゲストも通すため identity source は空（キャッシュ無効が条件）
        authorizer = apigw.RequestAuthorizer(
            self,
            "StaffKeyAuthorizer",
            handler=authorizer_fn,
            identity_sources=[],
            results_cache_ttl=Duration.seconds(0),
        )

        bookings_resource = self.rest_api.root.add_resource("bookings")
        type_resource = bookings_resource.add_resource("{resource_type}")

        # POST /bookings/{resource_type} -> 申込み（決済 + 予約作成）
        type_resource.add_method(
            "POST",
            apigw.LambdaIntegration(create_booking),
            authorizer=authorizer,
        )

        # GET /bookings/{resource_type} -> 予約一覧
        type_resource.add_method(
            "GET",
            apigw.LambdaIntegration(list_bookings),
            authorizer=authorizer,
        )

        # PATCH /bookings/{resource_type}/{booking_id} -> スタッフ操作
        booking_resource = type_resource.add_resource("{booking_id}")
        booking_resource.add_method(
            "PATCH",
            apigw.LambdaIntegration(update_booking),
            authorizer=authorizer,
        )

        # GET /payment-methods -> 支払い方法一覧
        self.rest_api.root.add_resource("payment-methods").add_method(
            "GET",
            apigw.LambdaIntegration(payment_methods),
        )
