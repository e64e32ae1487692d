"""
sleep_stats

Pure logic for turning a wearable sleep export into per-night stage totals:
  records -> nights -> aggregate -> trend / report

Nothing in here renders images or parses command-line flags.
"""
