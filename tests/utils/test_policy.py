import json

from snstesting.utils.policy import render_queue_policy


class TestQueuePolicy:
    def test_should_render_valid_policy_for_topic_and_queue(self):
        # Act
        policy = json.loads(render_queue_policy("arn:foo:bar:sometopic", "arn:foo:bar:testingqueue"))

        # Assert
        assert policy == {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Sid": "allow-sns-messages",
                    "Effect": "Allow",
                    "Principal": "*",
                    "Resource": "arn:foo:bar:testingqueue",
                    "Action": "SQS:SendMessage",
                    "Condition": {"ArnEquals": {"aws:SourceArn": "arn:foo:bar:sometopic"}},
                }
            ],
        }
