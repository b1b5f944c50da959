_TOPIC_ARN_PLACEHOLDER = "<<TOPIC_ARN>>"
_QUEUE_ARN_PLACEHOLDER = "<<QUEUE_ARN>>"

QUEUE_POLICY_TEMPLATE = """
{
  "Version": "2012-10-17",
  "Statement": [
    {
      "Sid": "allow-sns-messages",
      "Effect": "Allow",
      "Principal": "*",
      "Resource": "<<QUEUE_ARN>>",
      "Action": "SQS:SendMessage",
      "Condition": {
        "ArnEquals": {
          "aws:SourceArn": "<<TOPIC_ARN>>"
        }
      }
    }
  ]
}
"""


def render_queue_policy(topic_arn: str, queue_arn: str) -> str:
    """Policy letting only the given topic send messages to the given queue"""
    policy = QUEUE_POLICY_TEMPLATE.replace(_TOPIC_ARN_PLACEHOLDER, topic_arn)
    return policy.replace(_QUEUE_ARN_PLACEHOLDER, queue_arn)
