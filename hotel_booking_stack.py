from aws_cdk import CfnOutput, Stack
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

from infra.constructs import Api, Database, Functions, Layers


class HotelBookingStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            common_layer=layers.common_layer,
        )

        staff_key_secret = secretsmanager.Secret(
            self,
            "StaffKeySecret",
            secret_name="/hotel-booking/staff-key",
            generate_secret_string=secretsmanager.SecretStringGenerator(
                exclude_punctuation=True,
                password_length=32,
            ),
        )

        api = Api(
            self,
            "Api",
            create_booking=fns.create_booking,
            update_booking=fns.update_booking,
            list_bookings=fns.list_bookings,
            payment_methods=fns.payment_methods,
            common_layer=layers.common_layer,
            staff_key_secret=staff_key_secret,
        )

        CfnOutput(self, "ApiUrl", value=api.rest_api.url)
        CfnOutput(self, "TableName", value=database.table.table_name)
