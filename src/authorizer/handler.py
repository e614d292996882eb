import hmac
import os

import boto3
from aws_lambda_powertools import Logger

logger = Logger()

_secret_cache: str | None = None


def _get_secret() -> str:
    global _secret_cache
    if _secret_cache is None:
        client = boto3.client("secretsmanager")
        response = client.get_secret_value(SecretId=os.environ["STAFF_KEY_SECRET_ARN"])
        _secret_cache = response["SecretString"]
    return _secret_cache


def _resource_arn(method_arn: str) -> str:
    """全メソッド・全リソースを許可する ARN（キャッシュされた結果を他ルートでも使うため）"""
    arn_parts = method_arn.split(":")
    region = arn_parts[3]
    account_id = arn_parts[4]
    api_gw_arn = arn_parts[5]
    rest_api_id = api_gw_arn.split("/")[0]
    stage = api_gw_arn.split("/")[1]
    return f"arn:aws:execute-api:{region}:{account_id}:{rest_api_id}/{stage}/*/*"


@logger.inject_lambda_context
def lambda_handler(event, context):
    """スタッフキー検証の Lambda Authorizer

    x-staff-key が一致すればスタッフ、ヘッダーが無ければゲストとして通す。
    キーが指定されていて一致しない場合は拒否する。
    """
    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    actual = headers.get("x-staff-key")

    if actual is None:
        role, actor = "guest", "guest"
    elif hmac.compare_digest(actual, _get_secret()):
        role, actor = "staff", headers.get("x-staff-id") or "staff"
    else:
        logger.info("Rejected invalid staff key")
        raise Exception("Unauthorized")

    logger.info("Authorized request", extra={"role": role})
    return {
        "principalId": actor,
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Action": "execute-api:Invoke",
                    "Effect": "Allow",
                    "Resource": _resource_arn(event["methodArn"]),
                }
            ],
        },
        "context": {"role": role, "actor": actor},
    }
