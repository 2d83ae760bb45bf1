# Seed shared by every torch.Generator used for parameter initialization.
SAMPLE_SEED = 2147483647

# Negative rate: update() adds rate * grad, so this descends the loss.
LEARNING_RATE = -0.02
NUM_EPOCHS = 100
LOG_INTERVAL = 10

NUM_INPUTS = 3
LAYER_SIZES = [4, 4, 1]
